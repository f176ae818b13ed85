"""
FastAPI routes for flashcard review.
"""

from fastapi import APIRouter, Depends
from typing import List

from services.flashcard_service import FlashcardService
from models.tutor_models import Flashcard, StatusUpdateRequest
from utils.auth import get_current_user_id

router = APIRouter(prefix="/api/flashcards", tags=["flashcards"])

flashcard_service = FlashcardService()


@router.get("/{topic_id}", response_model=List[Flashcard])
async def get_flashcards(topic_id: str, user_id: str = Depends(get_current_user_id)):
    return await flashcard_service.list_flashcards(user_id, topic_id)


@router.put("/{flashcard_id}", response_model=Flashcard)
async def update_flashcard(
    flashcard_id: str,
    request: StatusUpdateRequest,
    user_id: str = Depends(get_current_user_id)
):
    """status: new | learning | mastered"""
    return await flashcard_service.update_status(user_id, flashcard_id, request.status)
