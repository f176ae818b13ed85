"""
AI gateway for the tutor.
Builds a prompt per content type, sends it to the completion provider,
and parses the reply into domain structures.
"""

import logging
from typing import Any, List, Optional

import groq
from pydantic import TypeAdapter

from clients import groq_client
from models.tutor_models import ExplainLanguage, LessonContent, QuizQuestion, FlashcardDraft, QAPair
from prompts import tutor_prompts as prompts
from utils.exceptions import AIServiceError, ContentGenerationError, ValidationError
from utils.model_config import ModelConfig, TutorTask
from utils.text_utils import extract_json

logger = logging.getLogger(__name__)

CONFIG_ERROR_MESSAGE = "AI service configuration error. Please contact support."
RATE_LIMIT_MESSAGE = "Too many questions at once. Please wait a moment and try again."
UNAVAILABLE_MESSAGE = "Unable to generate answer right now. Please try again in a moment."

_questions_adapter = TypeAdapter(List[QuizQuestion])
_flashcards_adapter = TypeAdapter(List[FlashcardDraft])
_qa_adapter = TypeAdapter(List[QAPair])


def classify_provider_error(error: Exception) -> str:
    """Map a provider failure to a user-safe message."""
    text = str(error).lower()
    if isinstance(error, groq.AuthenticationError) or "api key" in text:
        return CONFIG_ERROR_MESSAGE
    if isinstance(error, groq.RateLimitError) or "rate limit" in text:
        return RATE_LIMIT_MESSAGE
    return UNAVAILABLE_MESSAGE


def flatten_lesson_text(content: LessonContent) -> str:
    """Single text block: introduction, then titled steps, then key points."""
    steps = "\n\n".join(f"{step.title}: {step.content}" for step in content.steps)
    summary = "\n".join(content.summary)
    return f"{content.introduction}\n\n{steps}\n\nKey Points:\n{summary}"


def _list_payload(data: Any, key: str, item_field: str, label: str) -> List[Any]:
    """
    Items from a bare JSON array, an object wrapping them under `key`,
    or a single item object (recognised by `item_field`).

    Raises:
        ContentGenerationError: if the reply holds no items.
    """
    if isinstance(data, dict):
        if key in data:
            data = data[key]
        elif item_field in data:
            data = [data]
        else:
            logger.error(f"{label} response has no '{key}' list; keys: {list(data)}")
            raise ContentGenerationError(f"Failed to generate {label}", context={"key": key})

    if not isinstance(data, list) or not data:
        logger.error(f"{label} response holds no items: {str(data)[:200]}")
        raise ContentGenerationError(f"Failed to generate {label}", context={"key": key})
    return data


class AIService:
    """Prompt -> completion -> parse, one method per content type"""

    async def _complete(self, task: TutorTask, system_prompt: str, user_prompt: str) -> str:
        config = ModelConfig.get_config(task)
        return await groq_client.generate_completion(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=config["model"],
            temperature=config["temperature"],
            max_tokens=config["max_tokens"],
        )

    async def _generate_json(
        self, task: TutorTask, system_prompt: str, user_prompt: str, expect: Optional[type] = None
    ) -> Any:
        """Structured generation; any failure becomes ContentGenerationError."""
        try:
            raw = await self._complete(task, system_prompt, user_prompt)
        except Exception as e:
            logger.error(f"Provider error during {task.value}: {e}")
            raise ContentGenerationError(
                f"Failed to generate {task.value.replace('_', ' ')}",
                context={"task": task.value},
            ) from e

        try:
            return extract_json(raw, expect=expect)
        except ValueError as e:
            logger.error(f"Unparseable {task.value} response: {e}")
            raise ContentGenerationError(
                f"Failed to generate {task.value.replace('_', ' ')}",
                context={"task": task.value},
            ) from e

    async def _generate_text(self, task: TutorTask, system_prompt: str, user_prompt: str, failure: str) -> str:
        """Freeform generation; provider failures become AIServiceError."""
        try:
            return await self._complete(task, system_prompt, user_prompt)
        except Exception as e:
            logger.error(f"Provider error during {task.value}: {e}")
            raise AIServiceError(failure, context={"task": task.value}) from e

    async def generate_lesson(self, title: str, level: str) -> LessonContent:
        data = await self._generate_json(
            TutorTask.LESSON,
            prompts.JSON_TUTOR_SYSTEM_PROMPT,
            prompts.build_lesson_prompt(title, level),
        )
        try:
            return LessonContent.model_validate(data)
        except ValueError as e:
            logger.error(f"Lesson response failed validation: {e}")
            raise ContentGenerationError("Failed to generate lesson content") from e

    async def generate_quiz(self, title: str, level: str, lesson_content: LessonContent) -> List[QuizQuestion]:
        data = await self._generate_json(
            TutorTask.QUIZ,
            prompts.JSON_TUTOR_SYSTEM_PROMPT,
            prompts.build_quiz_prompt(title, level, lesson_content.model_dump()),
        )
        try:
            return _questions_adapter.validate_python(_list_payload(data, "questions", "question", "quiz"))
        except ValueError as e:
            logger.error(f"Quiz response failed validation: {e}")
            raise ContentGenerationError("Failed to generate quiz") from e

    async def generate_flashcards(self, title: str, level: str, lesson_content: LessonContent) -> List[FlashcardDraft]:
        data = await self._generate_json(
            TutorTask.FLASHCARDS,
            prompts.JSON_TUTOR_SYSTEM_PROMPT,
            prompts.build_flashcards_prompt(title, level, lesson_content.model_dump()),
        )
        try:
            return _flashcards_adapter.validate_python(_list_payload(data, "flashcards", "front", "flashcards"))
        except ValueError as e:
            logger.error(f"Flashcard response failed validation: {e}")
            raise ContentGenerationError("Failed to generate flashcards") from e

    async def answer_doubt(self, question: str, topic_title: str, lesson_content: LessonContent) -> str:
        """
        Answer a student's question in the context of their lesson.

        Raises:
            AIServiceError: with one of three user-safe messages depending
                on whether the provider reported a key problem, rate limiting,
                or anything else.
        """
        user_prompt = prompts.build_doubt_prompt(question, topic_title, lesson_content.model_dump())
        try:
            answer = await self._complete(TutorTask.ANSWER_DOUBT, prompts.DOUBT_SYSTEM_PROMPT, user_prompt)
        except Exception as e:
            logger.error(f"Provider error answering doubt on '{topic_title}': {e}")
            raise AIServiceError(classify_provider_error(e), context={"task": TutorTask.ANSWER_DOUBT.value}) from e

        if not answer:
            logger.error(f"Empty answer from provider for doubt on '{topic_title}'")
            raise AIServiceError(UNAVAILABLE_MESSAGE, context={"task": TutorTask.ANSWER_DOUBT.value})
        return answer

    async def explain_simply(self, text: str, topic_title: str = "") -> str:
        return await self._generate_text(
            TutorTask.EXPLAIN_SIMPLY,
            prompts.EXPLAIN_SIMPLY_SYSTEM_PROMPT,
            prompts.build_explain_simply_prompt(text, topic_title),
            "Failed to generate simple explanation",
        )

    async def explain_with_example(self, text: str, topic_title: str = "") -> str:
        return await self._generate_text(
            TutorTask.EXPLAIN_WITH_EXAMPLE,
            prompts.EXAMPLE_SYSTEM_PROMPT,
            prompts.build_example_prompt(text, topic_title),
            "Failed to generate example",
        )

    async def explain_in_language(self, text: str, language: str, topic_title: str = "") -> str:
        try:
            target = ExplainLanguage((language or "").strip().lower())
        except ValueError:
            supported = ", ".join(l.value for l in ExplainLanguage)
            raise ValidationError(
                f"Unsupported language '{language}'. Supported: {supported}",
                error_code="UNSUPPORTED_LANGUAGE",
                context={"language": language},
            )

        return await self._generate_text(
            TutorTask.EXPLAIN_IN_LANGUAGE,
            prompts.language_system_prompt(target),
            prompts.build_language_prompt(text, target, topic_title),
            f"Failed to generate {target.value} explanation",
        )

    async def generate_key_points(self, lesson_content: LessonContent, topic_title: str) -> str:
        return await self._generate_text(
            TutorTask.KEY_POINTS,
            prompts.KEY_POINTS_SYSTEM_PROMPT,
            prompts.build_key_points_prompt(lesson_content.model_dump(), topic_title),
            "Failed to generate key points",
        )

    async def extract_keywords(self, lesson_content: LessonContent, topic_title: str) -> List[str]:
        raw = await self._generate_text(
            TutorTask.KEYWORDS,
            prompts.KEYWORDS_SYSTEM_PROMPT,
            prompts.build_keywords_prompt(lesson_content.model_dump(), topic_title),
            "Failed to extract keywords",
        )
        return [k.strip() for k in raw.split(",") if k.strip()]

    async def ask_about_text(self, text: str, question: str, topic_title: str = "") -> str:
        return await self._generate_text(
            TutorTask.ASK_ABOUT_TEXT,
            prompts.ASK_ABOUT_TEXT_SYSTEM_PROMPT,
            prompts.build_ask_about_text_prompt(text, question, topic_title),
            "Failed to answer question",
        )

    async def generate_qa(self, lesson_text: str, topic_title: str) -> List[QAPair]:
        data = await self._generate_json(
            TutorTask.GENERATE_QA,
            prompts.QA_SYSTEM_PROMPT,
            prompts.build_qa_prompt(lesson_text, topic_title),
            expect=list,
        )
        try:
            return _qa_adapter.validate_python(_list_payload(data, "qaList", "question", "Q&A"))
        except ValueError as e:
            logger.error(f"Q&A response failed validation: {e}")
            raise ContentGenerationError("Failed to generate Q&A") from e


ai_service = AIService()
