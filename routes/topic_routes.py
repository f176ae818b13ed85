"""
FastAPI routes for topics: generation, access, single-field updates and
learning-boost endpoints.
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from services.topic_service import TopicService
from models.tutor_models import (
    Topic, TopicBundle, TopicGenerationResponse, GenerateTopicRequest,
    NotesUpdateRequest, StatusUpdateRequest, ExplainRequest, ExplainLanguageRequest,
    AskAboutTextRequest, MessageResponse, BookmarkResponse, NotesResponse,
    ProgressResponse, ExplanationResponse, AnswerResponse, KeyPointsResponse,
    KeywordsResponse, QAListResponse
)
from utils.auth import get_current_user_id

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/topics", tags=["topics"])

topic_service = TopicService()


@router.post("/generate", status_code=201, response_model=TopicGenerationResponse)
async def generate_topic(request: GenerateTopicRequest, user_id: str = Depends(get_current_user_id)):
    """
    Create a topic and generate its lesson, quiz and flashcards.

    **Blocking operation** - three sequential-ish model calls.
    """
    bundle = await topic_service.generate_topic(user_id, request.title, request.level)
    return TopicGenerationResponse(**bundle.model_dump())


@router.get("", response_model=List[Topic])
async def list_topics(user_id: str = Depends(get_current_user_id)):
    """All topics for the current user, newest first"""
    return await topic_service.list_topics(user_id)


# Stateless explanations (registered before /{topic_id} routes)
@router.post("/explain-simply", response_model=ExplanationResponse)
async def explain_simply(request: ExplainRequest, user_id: str = Depends(get_current_user_id)):
    explanation = await topic_service.explain_simply(request.text, request.topic_title)
    return ExplanationResponse(explanation=explanation)


@router.post("/explain-example", response_model=ExplanationResponse)
async def explain_with_example(request: ExplainRequest, user_id: str = Depends(get_current_user_id)):
    explanation = await topic_service.explain_with_example(request.text, request.topic_title)
    return ExplanationResponse(explanation=explanation)


@router.post("/explain-language", response_model=ExplanationResponse)
async def explain_in_language(request: ExplainLanguageRequest, user_id: str = Depends(get_current_user_id)):
    """Supported languages: hindi, hinglish"""
    explanation = await topic_service.explain_in_language(
        request.text, request.language, request.topic_title
    )
    return ExplanationResponse(explanation=explanation)


@router.post("/ask-about-text", response_model=AnswerResponse)
async def ask_about_text(request: AskAboutTextRequest, user_id: str = Depends(get_current_user_id)):
    answer = await topic_service.ask_about_text(request.text, request.question, request.topic_title)
    return AnswerResponse(answer=answer)


# Single topic
@router.get("/{topic_id}", response_model=TopicBundle)
async def get_topic(topic_id: str, user_id: str = Depends(get_current_user_id)):
    return await topic_service.get_topic(user_id, topic_id)


@router.delete("/{topic_id}", response_model=MessageResponse)
async def delete_topic(topic_id: str, user_id: str = Depends(get_current_user_id)):
    """Delete topic with its lesson, quiz, flashcards and doubts"""
    await topic_service.delete_topic(user_id, topic_id)
    return MessageResponse(message="Topic deleted successfully")


@router.put("/{topic_id}/bookmark", response_model=BookmarkResponse)
async def toggle_bookmark(topic_id: str, user_id: str = Depends(get_current_user_id)):
    is_bookmarked = await topic_service.toggle_bookmark(user_id, topic_id)
    return BookmarkResponse(is_bookmarked=is_bookmarked)


@router.put("/{topic_id}/notes", response_model=NotesResponse)
async def update_notes(topic_id: str, request: NotesUpdateRequest, user_id: str = Depends(get_current_user_id)):
    notes = await topic_service.update_notes(user_id, topic_id, request.notes)
    return NotesResponse(notes=notes)


@router.put("/{topic_id}/progress", response_model=ProgressResponse)
async def update_progress(topic_id: str, request: StatusUpdateRequest, user_id: str = Depends(get_current_user_id)):
    """status: not-started | in-progress | understood | revise-later"""
    progress_status = await topic_service.update_progress(user_id, topic_id, request.status)
    return ProgressResponse(progress_status=progress_status)


# Lesson-based learning boosts
@router.post("/{topic_id}/key-points", response_model=KeyPointsResponse)
async def generate_key_points(topic_id: str, user_id: str = Depends(get_current_user_id)):
    key_points = await topic_service.generate_key_points(user_id, topic_id)
    return KeyPointsResponse(key_points=key_points)


@router.post("/{topic_id}/keywords", response_model=KeywordsResponse)
async def extract_keywords(topic_id: str, user_id: str = Depends(get_current_user_id)):
    keywords = await topic_service.extract_keywords(user_id, topic_id)
    return KeywordsResponse(keywords=keywords)


@router.post("/{topic_id}/generate-qa", response_model=QAListResponse)
async def generate_topic_qa(topic_id: str, user_id: str = Depends(get_current_user_id)):
    qa_list = await topic_service.generate_topic_qa(user_id, topic_id)
    return QAListResponse(qa_list=qa_list)
