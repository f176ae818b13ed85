"""
FastAPI routes for doubts (questions asked about a topic).
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from services.doubt_service import DoubtService
from models.tutor_models import AskDoubtRequest, Doubt
from utils.auth import get_current_user_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/doubts", tags=["doubts"])

doubt_service = DoubtService()


@router.post("/ask", status_code=201, response_model=Doubt)
async def ask_doubt(request: AskDoubtRequest, user_id: str = Depends(get_current_user_id)):
    """
    Ask a question about a topic.

    Returns 503 (AI_SERVICE_ERROR) when the model could not answer;
    nothing is stored in that case.
    """
    return await doubt_service.ask_doubt(user_id, request.topic_id, request.question)


@router.get("/{topic_id}", response_model=List[Doubt])
async def get_doubts(topic_id: str, user_id: str = Depends(get_current_user_id)):
    """Doubts for a topic, newest first"""
    return await doubt_service.list_doubts(user_id, topic_id)
