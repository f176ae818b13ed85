"""
Text helpers shared by the AI gateway and the speech adapter.
"""

import json
import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) the model may wrap around its output."""
    return _FENCE_PATTERN.sub("", text).strip()


def extract_json(text: str, expect: Optional[type] = None) -> Any:
    """
    Extract a JSON value from freeform model output.

    Tries the fence-stripped text as-is, then the outermost {...} object,
    then the outermost [...] array. When `expect` is list the array is
    tried before the object, so a reply holding a one-item array after
    some prose is not mistaken for that item.

    Raises:
        ValueError: if no JSON value can be decoded.
    """
    if text is None:
        raise ValueError("Empty model response")

    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    patterns = (r"\{.*\}", r"\[.*\]")
    if expect is list:
        patterns = patterns[::-1]

    for pattern in patterns:
        match = re.search(pattern, cleaned, re.DOTALL)
        if not match:
            continue
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            continue

    logger.error(f"Could not extract JSON from: {cleaned[:500]}")
    raise ValueError("Model response is not valid JSON")


def chunk_text(text: str, max_length: int = 200) -> List[str]:
    """
    Break text into chunks of at most max_length characters.

    Sentences are kept whole where they fit; a sentence longer than
    max_length is split on word boundaries.
    """
    text = text.strip()
    if len(text) <= max_length:
        return [text] if text else []

    sentences = re.findall(r"[^.!?]+[.!?]+|[^.!?]+$", text) or [text]
    chunks: List[str] = []
    current = ""

    for sentence in sentences:
        if len(current + sentence) <= max_length:
            current += sentence
            continue
        if current.strip():
            chunks.append(current.strip())
        current = ""
        if len(sentence) <= max_length:
            current = sentence
            continue
        # Long sentence: pack words
        words = sentence.split()
        for word in words:
            candidate = f"{current} {word}" if current else word
            if len(candidate) > max_length and current:
                chunks.append(current.strip())
                current = word
            else:
                current = candidate
        current += " "

    if current.strip():
        chunks.append(current.strip())

    # A single word longer than max_length is hard-cut
    fixed: List[str] = []
    for c in chunks:
        if len(c) <= max_length:
            fixed.append(c)
        else:
            fixed.extend(c[i:i + max_length] for i in range(0, len(c), max_length))
    return fixed
