import os
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv
from supabase import create_client, Client
import logging

load_dotenv()

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None

TOPICS = "topics"
LESSONS = "lessons"
QUIZZES = "quizzes"
FLASHCARDS = "flashcards"
DOUBTS = "doubts"


def get_supabase() -> Client:
    global _supabase_client
    if _supabase_client is None:
        url = os.getenv("SUPABASE_URL")
        key = os.getenv("SUPABASE_KEY")
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")
        _supabase_client = create_client(url, key)
    return _supabase_client


def _insert(table: str, rows: Any) -> List[Dict[str, Any]]:
    response = get_supabase().table(table).insert(rows).execute()
    if not response.data:
        raise Exception(f"Supabase insert into '{table}' returned no rows: {response}")
    return response.data


def _first(data: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    return data[0] if data else None


# ─── Topics ───────────────────────────────────────────────────────────────────

def insert_topic(topic: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insert a new row into the 'topics' table.
    Args:
        topic: Column dict (id, user_id, title, level, ...).
    Returns:
        The stored row.
    """
    return _insert(TOPICS, topic)[0]


def get_topic_by_id(topic_id: str) -> Optional[Dict[str, Any]]:
    response = get_supabase().table(TOPICS).select("*").eq("id", topic_id).limit(1).execute()
    return _first(response.data)


def list_topics_by_user(user_id: str) -> List[Dict[str, Any]]:
    """All topics owned by user_id, newest first."""
    response = (
        get_supabase().table(TOPICS)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return response.data or []


def update_topic(topic_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    response = get_supabase().table(TOPICS).update(fields).eq("id", topic_id).execute()
    return _first(response.data)


def delete_topic(topic_id: str) -> None:
    get_supabase().table(TOPICS).delete().eq("id", topic_id).execute()


# ─── Lessons / Quizzes ────────────────────────────────────────────────────────

def insert_lesson(lesson: Dict[str, Any]) -> Dict[str, Any]:
    return _insert(LESSONS, lesson)[0]


def get_lesson_by_topic(topic_id: str) -> Optional[Dict[str, Any]]:
    """First lesson for a topic (one per topic by convention)."""
    response = (
        get_supabase().table(LESSONS)
        .select("*")
        .eq("topic_id", topic_id)
        .order("created_at")
        .limit(1)
        .execute()
    )
    return _first(response.data)


def insert_quiz(quiz: Dict[str, Any]) -> Dict[str, Any]:
    return _insert(QUIZZES, quiz)[0]


def get_quiz_by_topic(topic_id: str) -> Optional[Dict[str, Any]]:
    response = (
        get_supabase().table(QUIZZES)
        .select("*")
        .eq("topic_id", topic_id)
        .order("created_at")
        .limit(1)
        .execute()
    )
    return _first(response.data)


# ─── Flashcards ───────────────────────────────────────────────────────────────

def insert_flashcards(flashcards: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Bulk insert flashcard rows; returns the stored rows in insertion order."""
    if not flashcards:
        return []
    return _insert(FLASHCARDS, flashcards)


def get_flashcards_by_topic(topic_id: str) -> List[Dict[str, Any]]:
    response = (
        get_supabase().table(FLASHCARDS)
        .select("*")
        .eq("topic_id", topic_id)
        .order("created_at")
        .execute()
    )
    return response.data or []


def get_flashcard_by_id(flashcard_id: str) -> Optional[Dict[str, Any]]:
    response = get_supabase().table(FLASHCARDS).select("*").eq("id", flashcard_id).limit(1).execute()
    return _first(response.data)


def update_flashcard(flashcard_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    response = get_supabase().table(FLASHCARDS).update(fields).eq("id", flashcard_id).execute()
    return _first(response.data)


# ─── Doubts ───────────────────────────────────────────────────────────────────

def insert_doubt(doubt: Dict[str, Any]) -> Dict[str, Any]:
    return _insert(DOUBTS, doubt)[0]


def list_doubts_by_topic(topic_id: str) -> List[Dict[str, Any]]:
    """All doubts for a topic, newest first."""
    response = (
        get_supabase().table(DOUBTS)
        .select("*")
        .eq("topic_id", topic_id)
        .order("created_at", desc=True)
        .execute()
    )
    return response.data or []


# ─── Cascade ──────────────────────────────────────────────────────────────────

def delete_rows_by_topic(table: str, topic_id: str) -> None:
    """Delete every row in `table` that references topic_id."""
    get_supabase().table(table).delete().eq("topic_id", topic_id).execute()
