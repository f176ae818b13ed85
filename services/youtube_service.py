"""
YouTube video search for topic pages.
Falls back to static suggestions when no key is configured or the API fails.
"""

import os
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
PLACEHOLDER_KEY = "YOUR_YOUTUBE_API_KEY_HERE"
QUERY_SUFFIX = " tutorial explained learn course"
MOCK_THUMBNAIL = "https://img.youtube.com/vi/dQw4w9WgXcQ/mqdefault.jpg"


class YouTubeService:
    """Search educational videos; never raises to the caller"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def search_videos(self, query: str, max_results: int = 5) -> List[Dict[str, Any]]:
        api_key = os.getenv("YOUTUBE_API_KEY")
        if not api_key or api_key == PLACEHOLDER_KEY:
            logger.warning("YouTube API key not configured, returning mock videos")
            return self.mock_videos(query)

        params = {
            "part": "snippet",
            "q": f"{query}{QUERY_SUFFIX}",
            "type": "video",
            "maxResults": max_results,
            "key": api_key,
            "order": "relevance",
            "videoEmbeddable": "true",
            "videoDuration": "medium",
            "relevanceLanguage": "en",
            "safeSearch": "strict",
            "videoDefinition": "any",
            "videoCaption": "any",
        }

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=15.0) as client:
                response = await client.get(YOUTUBE_SEARCH_URL, params=params)
                response.raise_for_status()
                items = response.json().get("items", [])
            return [self._to_video(item) for item in items]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"YouTube search failed for '{query}', returning mock videos: {e}")
            return self.mock_videos(query)

    @staticmethod
    def _to_video(item: Dict[str, Any]) -> Dict[str, Any]:
        video_id = item["id"]["videoId"]
        snippet = item["snippet"]
        return {
            "videoId": video_id,
            "title": snippet.get("title", ""),
            "description": snippet.get("description", ""),
            "thumbnail": snippet["thumbnails"]["medium"]["url"],
            "channelTitle": snippet.get("channelTitle", ""),
            "publishedAt": snippet.get("publishedAt", ""),
            "url": f"https://www.youtube.com/watch?v={video_id}",
            "embedUrl": f"https://www.youtube.com/embed/{video_id}",
        }

    @staticmethod
    def mock_videos(query: str) -> List[Dict[str, Any]]:
        """Search-page links; not embeddable"""
        now = datetime.now(timezone.utc).isoformat()
        search_url = f"https://www.youtube.com/results?search_query={quote(query, safe='')}"
        return [
            {
                "videoId": "dQw4w9WgXcQ",
                "title": f"Learn {query} - Complete Tutorial",
                "description": f"A comprehensive tutorial covering all aspects of {query}. Perfect for beginners and advanced learners.",
                "thumbnail": MOCK_THUMBNAIL,
                "channelTitle": "Educational Channel",
                "publishedAt": now,
                "url": search_url,
                "embedUrl": None,
            },
            {
                "videoId": "sample2",
                "title": f"{query} Explained Simply",
                "description": f"Easy to understand explanation of {query} with real-world examples.",
                "thumbnail": MOCK_THUMBNAIL,
                "channelTitle": "Learn With Us",
                "publishedAt": now,
                "url": search_url,
                "embedUrl": None,
            },
        ]
