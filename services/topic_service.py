"""
Topic workflow.
Sequences AI gateway calls and repository writes to build a topic's
lesson, quiz and flashcards; enforces ownership on every topic operation.
"""

import asyncio
import time
import logging
from typing import Any, Awaitable, List, Optional, Tuple

from models.tutor_models import (
    Topic, Lesson, Quiz, Flashcard, QAPair, TopicBundle, TopicLevel, ProgressStatus
)
from services.ai_service import ai_service, flatten_lesson_text
from utils.auth import ensure_owner
from utils.exceptions import NotFoundError, ValidationError
from utils.model_config import ModelConfig
from utils.storage import (
    TopicStorage, LessonStorage, QuizStorage, FlashcardStorage, DoubtStorage,
    GenerationLogger, generate_uuid
)

logger = logging.getLogger(__name__)


def _require(value: Optional[str], message: str) -> str:
    """Trimmed non-empty string, else ValidationError."""
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


async def gather_or_cancel(*aws: Awaitable[Any]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in order.

    Unlike asyncio.gather, the first failure cancels the siblings that are
    still running, and every task has settled before that failure is
    re-raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)

    errors = [r for r in results if isinstance(r, Exception)]
    if errors:
        raise errors[0]
    return results


async def get_owned_topic(user_id: str, topic_id: str) -> Topic:
    """Load a topic and check that user_id owns it."""
    topic = await TopicStorage.get(topic_id)
    if not topic:
        raise NotFoundError("Topic not found", context={"topic_id": topic_id})
    ensure_owner(topic.user_id, user_id, resource=f"topic {topic_id}")
    return topic


class TopicService:
    """Topic generation, access and learning-boost operations"""

    def __init__(self):
        self.ai = ai_service
        self.logger = GenerationLogger()

    # ─── Generation ──────────────────────────────────────────────────────────

    async def generate_topic(self, user_id: str, title: Optional[str], level: Optional[str]) -> TopicBundle:
        """
        Create a topic and generate its lesson, quiz and flashcards.

        Not atomic: if a later step fails, the topic and any children
        already stored are kept. Quiz and flashcards run concurrently; if
        one fails the other is cancelled and nothing more is written.
        """
        if not (title and str(title).strip()) or not (level and str(level).strip()):
            raise ValidationError("Please provide title and level")
        title = title.strip()
        try:
            topic_level = TopicLevel(level.strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid level '{level}'. Must be one of: {', '.join(l.value for l in TopicLevel)}",
                context={"level": level},
            )

        start_time = time.time()
        topic = await TopicStorage.create(
            Topic(id=generate_uuid(), user_id=user_id, title=title, level=topic_level)
        )
        logger.info(f"Created topic {topic.id} '{title}' ({topic_level.value}) for user {user_id}")

        try:
            logger.info(f"Generating lesson for topic {topic.id}")
            content = await self.ai.generate_lesson(title, topic_level.value)
            lesson = await LessonStorage.create(
                Lesson(id=generate_uuid(), topic_id=topic.id, content=content)
            )

            logger.info(f"Generating quiz and flashcards for topic {topic.id}")
            questions, drafts = await gather_or_cancel(
                self.ai.generate_quiz(title, topic_level.value, content),
                self.ai.generate_flashcards(title, topic_level.value, content),
            )
            quiz, flashcards = await gather_or_cancel(
                QuizStorage.create(Quiz(id=generate_uuid(), topic_id=topic.id, questions=questions)),
                FlashcardStorage.create_many([
                    Flashcard(
                        id=generate_uuid(), topic_id=topic.id, user_id=user_id,
                        front=d.front, back=d.back
                    )
                    for d in drafts
                ]),
            )
        except Exception as e:
            logger.error(f"Topic generation failed for {topic.id}; partial records kept: {e}")
            await self.logger.log_generation_async({
                "type": "topic",
                "user_id": user_id,
                "topic_id": topic.id,
                "title": title,
                "level": topic_level.value,
                "model": ModelConfig.get_model(),
                "generation_time": round(time.time() - start_time, 2),
                "status": "error",
                "error": str(e),
            })
            raise

        generation_time = round(time.time() - start_time, 2)
        await self.logger.log_generation_async({
            "type": "topic",
            "user_id": user_id,
            "topic_id": topic.id,
            "title": title,
            "level": topic_level.value,
            "model": ModelConfig.get_model(),
            "steps": len(content.steps),
            "questions": len(questions),
            "flashcards": len(flashcards),
            "generation_time": generation_time,
            "status": "success",
        })
        logger.info(f"Topic {topic.id} generated in {generation_time}s")

        return TopicBundle(topic=topic, lesson=lesson, quiz=quiz, flashcards=flashcards)

    # ─── Access ──────────────────────────────────────────────────────────────

    async def list_topics(self, user_id: str) -> List[Topic]:
        return await TopicStorage.list_for_user(user_id)

    async def get_topic(self, user_id: str, topic_id: str) -> TopicBundle:
        topic = await get_owned_topic(user_id, topic_id)
        lesson, quiz, flashcards = await gather_or_cancel(
            LessonStorage.get_for_topic(topic_id),
            QuizStorage.get_for_topic(topic_id),
            FlashcardStorage.list_for_topic(topic_id),
        )
        return TopicBundle(topic=topic, lesson=lesson, quiz=quiz, flashcards=flashcards)

    async def delete_topic(self, user_id: str, topic_id: str) -> None:
        """Delete a topic with its lessons, quizzes, flashcards and doubts."""
        await get_owned_topic(user_id, topic_id)
        await gather_or_cancel(
            LessonStorage.delete_for_topic(topic_id),
            QuizStorage.delete_for_topic(topic_id),
            FlashcardStorage.delete_for_topic(topic_id),
            DoubtStorage.delete_for_topic(topic_id),
        )
        await TopicStorage.delete(topic_id)
        logger.info(f"Deleted topic {topic_id}")

    # ─── Single-field updates ────────────────────────────────────────────────

    async def _update(self, topic_id: str, fields: dict) -> Topic:
        topic = await TopicStorage.update(topic_id, fields)
        if not topic:
            raise NotFoundError("Topic not found", context={"topic_id": topic_id})
        return topic

    async def toggle_bookmark(self, user_id: str, topic_id: str) -> bool:
        topic = await get_owned_topic(user_id, topic_id)
        updated = await self._update(topic_id, {"is_bookmarked": not topic.is_bookmarked})
        return updated.is_bookmarked

    async def update_notes(self, user_id: str, topic_id: str, notes: Optional[str]) -> str:
        await get_owned_topic(user_id, topic_id)
        updated = await self._update(topic_id, {"notes": notes or ""})
        return updated.notes

    async def update_progress(self, user_id: str, topic_id: str, status: Optional[str]) -> ProgressStatus:
        try:
            progress = ProgressStatus(status)
        except ValueError:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(s.value for s in ProgressStatus)}",
                context={"status": status},
            )
        await get_owned_topic(user_id, topic_id)
        updated = await self._update(topic_id, {"progress_status": progress.value})
        return updated.progress_status

    # ─── Stateless explanations ──────────────────────────────────────────────

    async def explain_simply(self, text: Optional[str], topic_title: Optional[str] = "") -> str:
        text = _require(text, "Please provide text to explain")
        return await self.ai.explain_simply(text, topic_title or "")

    async def explain_with_example(self, text: Optional[str], topic_title: Optional[str] = "") -> str:
        text = _require(text, "Please provide text to explain")
        return await self.ai.explain_with_example(text, topic_title or "")

    async def explain_in_language(
        self, text: Optional[str], language: Optional[str], topic_title: Optional[str] = ""
    ) -> str:
        text = _require(text, "Please provide text to explain")
        language = _require(language, "Please provide a language")
        return await self.ai.explain_in_language(text, language, topic_title or "")

    async def ask_about_text(
        self, text: Optional[str], question: Optional[str], topic_title: Optional[str] = ""
    ) -> str:
        text = _require(text, "Please provide text")
        question = _require(question, "Please provide a question")
        return await self.ai.ask_about_text(text, question, topic_title or "")

    # ─── Lesson-based boosts ─────────────────────────────────────────────────

    async def _owned_lesson(self, user_id: str, topic_id: str) -> Tuple[Topic, Lesson]:
        topic = await get_owned_topic(user_id, topic_id)
        lesson = await LessonStorage.get_for_topic(topic_id)
        if not lesson:
            raise NotFoundError("Lesson not found", context={"topic_id": topic_id})
        return topic, lesson

    async def generate_key_points(self, user_id: str, topic_id: str) -> str:
        topic, lesson = await self._owned_lesson(user_id, topic_id)
        return await self.ai.generate_key_points(lesson.content, topic.title)

    async def extract_keywords(self, user_id: str, topic_id: str) -> List[str]:
        topic, lesson = await self._owned_lesson(user_id, topic_id)
        return await self.ai.extract_keywords(lesson.content, topic.title)

    async def generate_topic_qa(self, user_id: str, topic_id: str) -> List[QAPair]:
        topic, lesson = await self._owned_lesson(user_id, topic_id)
        return await self.ai.generate_qa(flatten_lesson_text(lesson.content), topic.title)
