"""
Prompt templates for the AI tutor.
Each builder returns the user prompt; system prompts are module constants.
"""

import json
from typing import Dict, Any

from models.tutor_models import ExplainLanguage


JSON_TUTOR_SYSTEM_PROMPT = "You are a helpful tutor. Always respond with valid JSON only, no additional text."

DOUBT_SYSTEM_PROMPT = (
    "You are a patient, knowledgeable AI tutor who explains concepts clearly with examples and "
    "encouragement. Always provide thoughtful, personalized answers."
)
EXPLAIN_SIMPLY_SYSTEM_PROMPT = "You simplify complex concepts into easy-to-understand language."
EXAMPLE_SYSTEM_PROMPT = "You teach through practical, relatable examples."
KEY_POINTS_SYSTEM_PROMPT = "You extract key learning points for effective revision."
KEYWORDS_SYSTEM_PROMPT = "You identify critical exam-focused keywords."
ASK_ABOUT_TEXT_SYSTEM_PROMPT = (
    "You are a friendly and helpful tutor. Answer questions about text selections clearly and "
    "concisely. Never refuse reasonable questions."
)
QA_SYSTEM_PROMPT = "You are a helpful tutor creating educational Q&A. Always respond with valid JSON only."

LANGUAGE_INSTRUCTIONS: Dict[ExplainLanguage, str] = {
    ExplainLanguage.HINDI: "Explain in HINDI (देवनागरी script). Use simple Hindi words.",
    ExplainLanguage.HINGLISH: (
        "Explain in HINGLISH (Hindi words with English script). Mix Hindi and English naturally "
        "like: \"Yeh concept bahut simple hai...\""
    ),
}

KEY_POINTS_CONTEXT_LIMIT = 3000
KEYWORDS_CONTEXT_LIMIT = 2500


def language_system_prompt(language: ExplainLanguage) -> str:
    return f"You are a friendly tutor who explains concepts in {language.value}."


def build_lesson_prompt(title: str, level: str) -> str:
    """Build prompt for the structured lesson"""
    return f"""You are a friendly personal tutor. Create a comprehensive explanation for the topic: "{title}" for a {level} student.

Structure your response as a JSON object with the following format:
{{
  "introduction": "A friendly introduction to the topic (2-3 sentences)",
  "steps": [
    {{
      "title": "Step 1 title",
      "content": "Detailed explanation of this step"
    }}
  ],
  "analogies": [
    "Real-life analogy 1",
    "Real-life analogy 2"
  ],
  "summary": [
    "Key point 1",
    "Key point 2",
    "Key point 3",
    "Key point 4",
    "Key point 5"
  ]
}}

Guidelines:
- Use simple, clear language appropriate for the level
- Include 4-6 steps for the explanation
- Provide 2 real-world analogies
- Create exactly 5 bullet points for the summary
- Make it engaging and easy to understand
- Use concrete examples where possible

Output only valid JSON, no additional text."""


def build_quiz_prompt(title: str, level: str, lesson_content: Dict[str, Any]) -> str:
    """Build prompt for the 5-question quiz"""
    return f"""Based on the topic "{title}" for a {level} student, create 5 multiple-choice questions.

Context from the lesson:
{json.dumps(lesson_content, ensure_ascii=False)}

Structure your response as a JSON object:
{{
  "questions": [
    {{
      "question": "Question text here?",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctIndex": 0,
      "explanation": "Why this answer is correct"
    }}
  ]
}}

Guidelines:
- Create exactly 5 questions
- Each question should have 4 options
- correctIndex should be 0-3 (array index of correct answer)
- Mix difficulty levels (easy, medium, hard)
- Include clear explanations
- Questions should test understanding, not just memory

Output only valid JSON, no additional text."""


def build_flashcards_prompt(title: str, level: str, lesson_content: Dict[str, Any]) -> str:
    """Build prompt for the 8 flashcards"""
    return f"""Based on the topic "{title}" for a {level} student, create 8 flashcards.

Context from the lesson:
{json.dumps(lesson_content, ensure_ascii=False)}

Structure your response as a JSON object:
{{
  "flashcards": [
    {{
      "front": "Question, term, or concept",
      "back": "Answer, definition, or explanation"
    }}
  ]
}}

Guidelines:
- Create exactly 8 flashcards
- Include key terms, concepts, formulas, or definitions
- Front should be concise (1-2 lines)
- Back should be clear but comprehensive
- Mix different types: definitions, examples, applications
- Ensure they cover the main points of the lesson

Output only valid JSON, no additional text."""


def build_doubt_context(topic_title: str, lesson_content: Dict[str, Any]) -> str:
    """Context block from the lesson introduction and summary points"""
    summary = lesson_content.get("summary") or []
    key_points = ", ".join(summary) if summary else "N/A"
    return f"""
Topic: {topic_title}
Introduction: {lesson_content.get("introduction", "")}
Key Points: {key_points}
"""


def build_doubt_prompt(question: str, topic_title: str, lesson_content: Dict[str, Any]) -> str:
    """Build prompt for answering a student's doubt"""
    context_summary = build_doubt_context(topic_title, lesson_content)
    return f"""You are an expert AI tutor helping a student learn about "{topic_title}".

📚 LESSON CONTEXT:
{context_summary}

❓ STUDENT'S QUESTION:
"{question}"

🎯 YOUR TASK:
Provide a comprehensive, well-formatted answer that:

1. **Directly answers their specific question**
2. **Uses simple, clear language** - No jargon unless necessary
3. **Provides step-by-step explanation** if needed
4. **Includes a real-world example or analogy** to make it relatable
5. **Connects to the lesson content** when relevant
6. **Is encouraging and supportive** - boost their confidence
7. **Suggests next steps** if applicable

✍️ FORMATTING GUIDELINES:
- Start with a brief introduction paragraph
- Use **bold text** for important terms and key concepts
- Break complex answers into clear paragraphs
- Use numbered points (1. 2. 3.) for step-by-step explanations
- Use bullet points (•) for lists of related items
- End with a concluding sentence or encouragement

Write your response in markdown format with proper formatting."""


def build_explain_simply_prompt(text: str, topic_title: str = "") -> str:
    return f"""Explain this in the SIMPLEST way possible for a student:

Topic: {topic_title}
Text: "{text}"

Rules:
- Use everyday language (no jargon)
- Make it short (2-3 sentences max)
- Use simple words a 10-year-old would understand
- Be clear and direct

Simple Explanation:"""


def build_example_prompt(text: str, topic_title: str = "") -> str:
    return f"""Provide a clear real-world EXAMPLE for this concept:

Topic: {topic_title}
Concept: "{text}"

Rules:
- Give ONE relatable, practical example from everyday life
- Show HOW it connects to the concept
- Keep it brief (3-4 sentences)
- Make it memorable

Example:"""


def build_language_prompt(text: str, language: ExplainLanguage, topic_title: str = "") -> str:
    """Caller must pass a validated ExplainLanguage"""
    return f"""{LANGUAGE_INSTRUCTIONS[language]}

Topic: {topic_title}
Text to explain: "{text}"

Rules:
- Keep it conversational and easy to understand
- Use simple vocabulary
- 2-4 sentences
- Be natural and friendly

Explanation:"""


def _steps_text(lesson_content: Dict[str, Any]) -> str:
    return " ".join(step.get("content", "") for step in lesson_content.get("steps") or [])


def build_key_points_prompt(lesson_content: Dict[str, Any], topic_title: str) -> str:
    content_text = f"""
Introduction: {lesson_content.get("introduction", "")}
Steps: {_steps_text(lesson_content)}
Summary: {" ".join(lesson_content.get("summary") or [])}
  """[:KEY_POINTS_CONTEXT_LIMIT]

    return f"""Extract the MOST IMPORTANT key points from this lesson on "{topic_title}":

{content_text}

Create 5-7 bullet points that:
- Highlight the core concepts
- Are exam-focused and memorable
- Use clear, concise language
- Include important keywords
- Can be quickly reviewed

Format as bullet points with • symbol."""


def build_keywords_prompt(lesson_content: Dict[str, Any], topic_title: str) -> str:
    content_text = f"""
Introduction: {lesson_content.get("introduction", "")}
Steps: {_steps_text(lesson_content)}
  """[:KEYWORDS_CONTEXT_LIMIT]

    return f"""Identify the MOST IMPORTANT exam keywords and terms from this lesson on "{topic_title}":

{content_text}

Extract 8-12 keywords/terms that:
- Are essential for exams
- Should be memorized
- Are frequently tested
- Represent core concepts

Format: Return as comma-separated terms (e.g., "photosynthesis, chlorophyll, glucose")"""


def build_ask_about_text_prompt(text: str, question: str, topic_title: str = "") -> str:
    topic_line = f"Topic: {topic_title}\n\n" if topic_title else ""
    return f"""You are a helpful tutor. Answer the student's question about this text:

{topic_line}Selected Text: "{text}"

Student's Question: {question}

Instructions:
- Answer the question directly and helpfully
- Focus on the selected text
- Be educational and clear
- Use simple language
- If asking for meaning/definition, explain what it means
- Don't refuse or redirect unless the question is completely unrelated
- Keep answer to 2-4 sentences

Answer:"""


def build_qa_prompt(lesson_text: str, topic_title: str) -> str:
    return f"""Based on this lesson content about "{topic_title}", generate 5 important questions and their detailed answers that will help students understand the topic better.

Lesson Content:
{lesson_text}

Create questions that:
- Cover key concepts from the lesson
- Are educational and thought-provoking
- Have clear, detailed answers (2-3 sentences each)
- Help reinforce learning

Format your response as a JSON array:
[
  {{
    "question": "Question text?",
    "answer": "Detailed answer explaining the concept"
  }}
]

Output only valid JSON, no additional text."""
