"""
FastAPI routes for supporting resources: text-to-speech, YouTube and
Google Books search, and motivational quotes.
"""

from fastapi import APIRouter, Depends, Query
from datetime import date, datetime, timezone
from typing import Optional
import logging

from services.tts_service import TTSService
from services.youtube_service import YouTubeService
from services.books_service import BooksService
from services import quote_service
from models.tutor_models import TTSRequest, TTSResponse, VideoSearchResponse, BookSearchResponse
from utils.auth import get_current_user_id
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["resources"])

tts_service = TTSService()
youtube_service = YouTubeService()
books_service = BooksService()

MAX_SEARCH_RESULTS = 50


def _search_params(query: Optional[str], max_results: Optional[str], default: int) -> tuple:
    if not query or not query.strip():
        raise ValidationError("Please provide a search query")
    if max_results is None:
        return query.strip(), default
    try:
        value = int(max_results)
    except ValueError:
        value = 0
    if not 1 <= value <= MAX_SEARCH_RESULTS:
        raise ValidationError(f"maxResults must be an integer between 1 and {MAX_SEARCH_RESULTS}")
    return query.strip(), value


@router.post("/tts", response_model=TTSResponse)
async def text_to_speech(request: TTSRequest, user_id: str = Depends(get_current_user_id)):
    """Split text into speakable chunks and return one audio URL per chunk (max 5000 chars)"""
    return tts_service.text_to_speech(request.text)


@router.get("/youtube/search", response_model=VideoSearchResponse)
async def search_youtube(
    query: Optional[str] = None,
    max_results: Optional[str] = Query(None, alias="maxResults"),
    user_id: str = Depends(get_current_user_id)
):
    """Educational videos for a query; mock suggestions when the API is unavailable"""
    query, limit = _search_params(query, max_results, default=5)
    videos = await youtube_service.search_videos(query, limit)
    return VideoSearchResponse(count=len(videos), videos=videos)


@router.get("/books/search", response_model=BookSearchResponse)
async def search_books(
    query: Optional[str] = None,
    max_results: Optional[str] = Query(None, alias="maxResults"),
    user_id: str = Depends(get_current_user_id)
):
    query, limit = _search_params(query, max_results, default=10)
    books = await books_service.search_books(query, limit)
    return BookSearchResponse(count=len(books), books=books)


@router.get("/quotes/daily")
async def get_daily_quote(user_id: str = Depends(get_current_user_id)):
    """Same quote all day"""
    today = date.today()
    return {
        "success": True,
        "quote": quote_service.daily_quote(today),
        "date": quote_service.format_quote_date(today),
    }


@router.get("/quotes/random")
async def get_random_quote(user_id: str = Depends(get_current_user_id)):
    return {
        "success": True,
        "quote": quote_service.random_quote(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
