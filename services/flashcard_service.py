"""
Flashcard review: list a topic's cards and move a card between
new / learning / mastered.
"""

import logging
from typing import List, Optional

from models.tutor_models import Flashcard, FlashcardStatus
from services.topic_service import get_owned_topic
from utils.auth import ensure_owner
from utils.exceptions import NotFoundError, ValidationError
from utils.storage import FlashcardStorage

logger = logging.getLogger(__name__)


class FlashcardService:

    async def list_flashcards(self, user_id: str, topic_id: str) -> List[Flashcard]:
        await get_owned_topic(user_id, topic_id)
        return await FlashcardStorage.list_for_topic(topic_id)

    async def update_status(self, user_id: str, flashcard_id: str, status: Optional[str]) -> Flashcard:
        """Ownership is checked against the card itself, not its topic."""
        try:
            new_status = FlashcardStatus(status)
        except ValueError:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(s.value for s in FlashcardStatus)}",
                context={"status": status},
            )

        flashcard = await FlashcardStorage.get(flashcard_id)
        if not flashcard:
            raise NotFoundError("Flashcard not found", context={"flashcard_id": flashcard_id})
        ensure_owner(flashcard.user_id, user_id, resource=f"flashcard {flashcard_id}")

        updated = await FlashcardStorage.update(flashcard_id, {"status": new_status.value})
        if not updated:
            raise NotFoundError("Flashcard not found", context={"flashcard_id": flashcard_id})
        logger.info(f"Flashcard {flashcard_id} -> {new_status.value}")
        return updated
