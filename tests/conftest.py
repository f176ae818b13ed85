"""
Shared fixtures: in-memory Supabase, scripted completion provider, auth tokens.
"""

import copy
import json
import time
from typing import Any, Dict, List, Optional

import jwt
import pytest
from fastapi.testclient import TestClient

from clients import groq_client, supabase_client

JWT_SECRET = "test-secret"


# ── In-memory Supabase ────────────────────────────────────────────────────────

class _Result:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class _Query:
    """Subset of the PostgREST query builder used by clients.supabase_client."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = rows
        self.op = "select"
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.max_rows: Optional[int] = None

    def select(self, *columns):
        self.op = "select"
        return self

    def insert(self, rows):
        self.op, self.payload = "insert", rows
        return self

    def update(self, fields):
        self.op, self.payload = "update", fields
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.max_rows = n
        return self

    def execute(self):
        if self.op == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            self.rows.extend(copy.deepcopy(new_rows))
            return _Result(copy.deepcopy(new_rows))

        matched = [r for r in self.rows if all(r.get(c) == v for c, v in self.filters)]

        if self.op == "update":
            for r in matched:
                r.update(copy.deepcopy(self.payload))
            return _Result(copy.deepcopy(matched))

        if self.op == "delete":
            for r in matched:
                self.rows.remove(r)
            return _Result(copy.deepcopy(matched))

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "")
            if desc:
                # newest insert first on equal timestamps
                matched = list(reversed(matched))
        if self.max_rows is not None:
            matched = matched[:self.max_rows]
        return _Result(copy.deepcopy(matched))


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}

    def table(self, name: str) -> _Query:
        return _Query(self.tables.setdefault(name, []))

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])


# ── Scripted completion provider ──────────────────────────────────────────────

def _lesson_json(steps: int = 5) -> str:
    return json.dumps({
        "introduction": "Plants make their own food using sunlight.",
        "steps": [{"title": f"Step {i + 1}", "content": f"Stage {i + 1} of the process."} for i in range(steps)],
        "analogies": ["A leaf is like a solar panel.", "Chlorophyll is like a kitchen."],
        "summary": ["Light is absorbed", "Water is split", "CO2 is fixed", "Glucose is made", "Oxygen is released"],
    })


def _quiz_json(count: int = 5) -> str:
    return json.dumps({
        "questions": [
            {
                "question": f"Question {i + 1}?",
                "options": ["A", "B", "C", "D"],
                "correctIndex": i % 4,
                "explanation": "Because.",
            }
            for i in range(count)
        ]
    })


def _flashcards_json(count: int = 8) -> str:
    return json.dumps({"flashcards": [{"front": f"Term {i + 1}", "back": f"Meaning {i + 1}"} for i in range(count)]})


def _qa_json() -> str:
    return json.dumps([{"question": f"Q{i + 1}?", "answer": f"A{i + 1}."} for i in range(5)])


# Marker found in each task's user prompt -> default reply
DEFAULT_REPLIES = {
    "lesson": ("Create a comprehensive explanation", f"```json\n{_lesson_json()}\n```"),
    "quiz": ("multiple-choice questions", _quiz_json()),
    "flashcards": ("create 8 flashcards", _flashcards_json()),
    "doubt": ("STUDENT'S QUESTION", "**Chlorophyll** is the green pigment that captures light."),
    "explain_simply": ("SIMPLEST way", "Plants cook with sunlight."),
    "explain_example": ("real-world EXAMPLE", "Like charging a phone with a solar panel."),
    "explain_language": ("Text to explain:", "Yeh concept bahut simple hai."),
    "key_points": ("Extract the MOST IMPORTANT key points", "• Light\n• Water\n• Glucose"),
    "keywords": ("exam keywords", "photosynthesis, chlorophyll, , glucose "),
    "ask_about_text": ("Selected Text:", "It means the plant absorbs light."),
    "qa": ("generate 5 important questions", f"Here you go:\n{_qa_json()}"),
}


class FakeCompletion:
    """
    Stands in for clients.groq_client.generate_completion.
    Replies are chosen by task; set `replies[task]` to a string, an exception,
    or an async callable returning the string.
    """

    def __init__(self):
        self.replies: Dict[str, Any] = {task: reply for task, (_, reply) in DEFAULT_REPLIES.items()}
        self.calls: List[Dict[str, Any]] = []

    def task_for(self, user_prompt: str) -> str:
        for task, (marker, _) in DEFAULT_REPLIES.items():
            if marker in user_prompt:
                return task
        raise AssertionError(f"Unrecognised prompt: {user_prompt[:80]}")

    def tasks_called(self) -> List[str]:
        return [c["task"] for c in self.calls]

    async def __call__(self, system_prompt, user_prompt, model, temperature=0.7, max_tokens=None):
        task = self.task_for(user_prompt)
        self.calls.append({
            "task": task,
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        reply = self.replies[task]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return await reply()
        return reply


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("JWT_SECRET", JWT_SECRET)
    monkeypatch.setenv("GENERATION_LOG_FILE", str(tmp_path / "topic_generation_logs.json"))
    for name in ("YOUTUBE_API_KEY", "GOOGLE_BOOKS_API_KEY", "TUTOR_MODEL", "JWT_ALGORITHM"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def fake_db(monkeypatch) -> FakeSupabase:
    fake = FakeSupabase()
    monkeypatch.setattr(supabase_client, "_supabase_client", fake)
    return fake


@pytest.fixture(autouse=True)
def fake_ai(monkeypatch) -> FakeCompletion:
    fake = FakeCompletion()
    monkeypatch.setattr(groq_client, "generate_completion", fake)
    return fake


def make_token(user_id: str, secret: str = JWT_SECRET, claim: str = "id", expires_in: int = 3600) -> str:
    return jwt.encode({claim: user_id, "exp": int(time.time()) + expires_in}, secret, algorithm="HS256")


def auth(user_id: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def client() -> TestClient:
    from main import app
    return TestClient(app, raise_server_exceptions=False)
