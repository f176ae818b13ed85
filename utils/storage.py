"""
Storage utilities for the AI tutor.
Supabase-backed repositories for topics, lessons, quizzes, flashcards and doubts.
Local JSON still used for generation logs.
"""

import asyncio
import json
import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime, timezone
import logging
import uuid

from clients import supabase_client as db
from models.tutor_models import Topic, Lesson, Quiz, Flashcard, Doubt
from utils.exceptions import StorageError

logger = logging.getLogger(__name__)

DEFAULT_GENERATION_LOG = "topic_generation_logs.json"


def generate_uuid() -> str:
    """Generate unique ID for stored records"""
    return str(uuid.uuid4())


def read_json_file(filepath: Path) -> Optional[Dict[str, Any]]:
    """Read JSON file, return None if not found or invalid"""
    try:
        if not filepath.exists():
            return None
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {filepath}: {e}")
        return None
    except OSError as e:
        logger.error(f"Error reading {filepath}: {e}")
        return None


def write_json_file(filepath: Path, data: Dict[str, Any]) -> bool:
    """Write data to JSON file atomically"""
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        temp_file = filepath.with_suffix('.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str)
        temp_file.replace(filepath)
        return True
    except OSError as e:
        logger.error(f"Error writing {filepath}: {e}")
        return False


def append_to_json_list(filepath: Path, item: Dict[str, Any]) -> bool:
    """Append item to JSON list file (creates if not exists)"""
    data = read_json_file(filepath) or {"items": []}
    if "items" not in data:
        data["items"] = []
    data["items"].append(item)
    return write_json_file(filepath, data)


async def _run(table: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Run a blocking Supabase call off the event loop, mapping failures to StorageError."""
    try:
        return await asyncio.to_thread(fn, *args)
    except Exception as e:
        logger.error(f"Supabase error on '{table}' ({fn.__name__}): {e}")
        raise StorageError(
            "Database operation failed",
            context={"table": table, "operation": fn.__name__},
        ) from e


def _row(model: Any) -> Dict[str, Any]:
    return model.model_dump(mode="json")


class TopicStorage:
    """Handle topic storage via Supabase"""

    @staticmethod
    async def create(topic: Topic) -> Topic:
        row = await _run(db.TOPICS, db.insert_topic, _row(topic))
        return Topic(**row)

    @staticmethod
    async def get(topic_id: str) -> Optional[Topic]:
        row = await _run(db.TOPICS, db.get_topic_by_id, topic_id)
        return Topic(**row) if row else None

    @staticmethod
    async def list_for_user(user_id: str) -> List[Topic]:
        rows = await _run(db.TOPICS, db.list_topics_by_user, user_id)
        return [Topic(**r) for r in rows]

    @staticmethod
    async def update(topic_id: str, fields: Dict[str, Any]) -> Optional[Topic]:
        row = await _run(db.TOPICS, db.update_topic, topic_id, fields)
        return Topic(**row) if row else None

    @staticmethod
    async def delete(topic_id: str) -> None:
        await _run(db.TOPICS, db.delete_topic, topic_id)


class LessonStorage:
    """Handle lesson storage via Supabase"""

    @staticmethod
    async def create(lesson: Lesson) -> Lesson:
        row = await _run(db.LESSONS, db.insert_lesson, _row(lesson))
        return Lesson(**row)

    @staticmethod
    async def get_for_topic(topic_id: str) -> Optional[Lesson]:
        row = await _run(db.LESSONS, db.get_lesson_by_topic, topic_id)
        return Lesson(**row) if row else None

    @staticmethod
    async def delete_for_topic(topic_id: str) -> None:
        await _run(db.LESSONS, db.delete_rows_by_topic, db.LESSONS, topic_id)


class QuizStorage:
    """Handle quiz storage via Supabase"""

    @staticmethod
    async def create(quiz: Quiz) -> Quiz:
        row = await _run(db.QUIZZES, db.insert_quiz, _row(quiz))
        return Quiz(**row)

    @staticmethod
    async def get_for_topic(topic_id: str) -> Optional[Quiz]:
        row = await _run(db.QUIZZES, db.get_quiz_by_topic, topic_id)
        return Quiz(**row) if row else None

    @staticmethod
    async def delete_for_topic(topic_id: str) -> None:
        await _run(db.QUIZZES, db.delete_rows_by_topic, db.QUIZZES, topic_id)


class FlashcardStorage:
    """Handle flashcard storage via Supabase"""

    @staticmethod
    async def create_many(flashcards: List[Flashcard]) -> List[Flashcard]:
        rows = await _run(db.FLASHCARDS, db.insert_flashcards, [_row(f) for f in flashcards])
        return [Flashcard(**r) for r in rows]

    @staticmethod
    async def list_for_topic(topic_id: str) -> List[Flashcard]:
        rows = await _run(db.FLASHCARDS, db.get_flashcards_by_topic, topic_id)
        return [Flashcard(**r) for r in rows]

    @staticmethod
    async def get(flashcard_id: str) -> Optional[Flashcard]:
        row = await _run(db.FLASHCARDS, db.get_flashcard_by_id, flashcard_id)
        return Flashcard(**row) if row else None

    @staticmethod
    async def update(flashcard_id: str, fields: Dict[str, Any]) -> Optional[Flashcard]:
        row = await _run(db.FLASHCARDS, db.update_flashcard, flashcard_id, fields)
        return Flashcard(**row) if row else None

    @staticmethod
    async def delete_for_topic(topic_id: str) -> None:
        await _run(db.FLASHCARDS, db.delete_rows_by_topic, db.FLASHCARDS, topic_id)


class DoubtStorage:
    """Handle doubt storage via Supabase"""

    @staticmethod
    async def create(doubt: Doubt) -> Doubt:
        row = await _run(db.DOUBTS, db.insert_doubt, _row(doubt))
        return Doubt(**row)

    @staticmethod
    async def list_for_topic(topic_id: str) -> List[Doubt]:
        rows = await _run(db.DOUBTS, db.list_doubts_by_topic, topic_id)
        return [Doubt(**r) for r in rows]

    @staticmethod
    async def delete_for_topic(topic_id: str) -> None:
        await _run(db.DOUBTS, db.delete_rows_by_topic, db.DOUBTS, topic_id)


class GenerationLogger:
    """Log topic generation attempts for debugging and cost tracking"""

    # Appends are read-modify-write; one writer at a time
    _lock = threading.Lock()

    @staticmethod
    def log_generation(log_entry: Dict[str, Any]) -> bool:
        """Log a generation attempt"""
        log_entry["timestamp"] = datetime.now(timezone.utc).isoformat()
        path = Path(os.getenv("GENERATION_LOG_FILE", DEFAULT_GENERATION_LOG))
        with GenerationLogger._lock:
            return append_to_json_list(path, log_entry)

    async def log_generation_async(self, log_entry: Dict[str, Any]) -> bool:
        """log_generation run off the event loop"""
        return await asyncio.to_thread(self.log_generation, log_entry)
