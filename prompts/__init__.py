# Prompts module initialization

# Tutor Prompts
from .tutor_prompts import (
    build_lesson_prompt,
    build_quiz_prompt,
    build_flashcards_prompt,
    build_doubt_prompt,
    build_explain_simply_prompt,
    build_example_prompt,
    build_language_prompt,
    build_key_points_prompt,
    build_keywords_prompt,
    build_ask_about_text_prompt,
    build_qa_prompt,
    LANGUAGE_INSTRUCTIONS
)

__all__ = [
    'build_lesson_prompt',
    'build_quiz_prompt',
    'build_flashcards_prompt',
    'build_doubt_prompt',
    'build_explain_simply_prompt',
    'build_example_prompt',
    'build_language_prompt',
    'build_key_points_prompt',
    'build_keywords_prompt',
    'build_ask_about_text_prompt',
    'build_qa_prompt',
    'LANGUAGE_INSTRUCTIONS'
]
