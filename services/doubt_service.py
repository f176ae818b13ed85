"""
Doubt workflow: answer a student's question about one of their topics
and keep the Q&A pair.
"""

import logging
from typing import List, Optional

from models.tutor_models import Doubt
from services.ai_service import ai_service
from services.topic_service import get_owned_topic
from utils.exceptions import AIServiceError, NotFoundError, ValidationError
from utils.storage import LessonStorage, DoubtStorage, generate_uuid

logger = logging.getLogger(__name__)


class DoubtService:

    def __init__(self):
        self.ai = ai_service

    async def ask_doubt(self, user_id: str, topic_id: Optional[str], question: Optional[str]) -> Doubt:
        """
        Answer `question` in the context of the topic's lesson and store it.

        Raises:
            ValidationError: topic_id or question missing.
            NotFoundError: topic or its lesson missing.
            ForbiddenError: topic owned by someone else.
            AIServiceError: 503, provider could not answer; nothing is stored.
        """
        if not (topic_id and str(topic_id).strip()) or not (question and str(question).strip()):
            raise ValidationError("Please provide topicId and question")
        topic_id = topic_id.strip()
        question = question.strip()

        topic = await get_owned_topic(user_id, topic_id)
        lesson = await LessonStorage.get_for_topic(topic_id)
        if not lesson:
            raise NotFoundError("Lesson not found for this topic", context={"topic_id": topic_id})

        logger.info(f"Answering doubt on topic {topic_id} for user {user_id}")
        try:
            answer = await self.ai.answer_doubt(question, topic.title, lesson.content)
        except AIServiceError as e:
            raise AIServiceError(e.message, status_code=503, context=e.context) from e

        return await DoubtStorage.create(
            Doubt(id=generate_uuid(), topic_id=topic_id, user_id=user_id, question=question, answer=answer)
        )

    async def list_doubts(self, user_id: str, topic_id: str) -> List[Doubt]:
        """Doubts for an owned topic, newest first."""
        await get_owned_topic(user_id, topic_id)
        return await DoubtStorage.list_for_topic(topic_id)
