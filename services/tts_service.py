"""
Text-to-speech via Google Translate's speech endpoint.
Text is chunked to the endpoint's length limit and each chunk becomes one
playable audio URL; no audio is fetched server-side.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from utils.exceptions import ValidationError
from utils.text_utils import chunk_text

logger = logging.getLogger(__name__)

TTS_HOST = "https://translate.google.com"
MAX_CHUNK_LENGTH = 200
MAX_TEXT_LENGTH = 5000


def build_audio_url(chunk: str, lang: str = "en", slow: bool = False) -> str:
    params = {
        "ie": "UTF-8",
        "q": chunk,
        "tl": lang,
        "total": 1,
        "idx": 0,
        "textlen": len(chunk),
        "client": "tw-ob",
        "prev": "input",
        "ttsspeed": 0.24 if slow else 1,
    }
    return str(httpx.URL(f"{TTS_HOST}/translate_tts", params=params))


class TTSService:

    def text_to_speech(self, text: Optional[str]) -> Dict[str, Any]:
        """
        Returns:
            {"audioUrls": [...], "chunks": n, "text": text}
        Raises:
            ValidationError: empty text or text over 5000 characters.
        """
        if not text or not text.strip():
            raise ValidationError("Please provide text")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f"Text is too long (max {MAX_TEXT_LENGTH} characters)")

        chunks = chunk_text(text, MAX_CHUNK_LENGTH)
        logger.info(f"TTS: {len(text)} chars -> {len(chunks)} chunks")
        return {
            "audioUrls": [build_audio_url(c) for c in chunks],
            "chunks": len(chunks),
            "text": text,
        }
