"""
Tests for the topic workflow against the in-memory Supabase.

Run with:
    python3 -m pytest tests/test_topic_service.py -v
"""

import asyncio
import json

import pytest

from models.tutor_models import ProgressStatus
from services.topic_service import TopicService, gather_or_cancel
from utils.exceptions import (
    ContentGenerationError, ForbiddenError, NotFoundError, ValidationError,
)

U1 = "user-1"
U2 = "user-2"


@pytest.fixture
def service() -> TopicService:
    return TopicService()


@pytest.fixture
async def topic_id(service) -> str:
    bundle = await service.generate_topic(U1, "Photosynthesis", "beginner")
    return bundle.topic.id


# ── Generation ────────────────────────────────────────────────────────────────

async def test_generate_topic_scenario(service, fake_ai, fake_db):
    bundle = await service.generate_topic(U1, "  Photosynthesis ", "beginner")

    assert bundle.topic.title == "Photosynthesis"
    assert bundle.topic.user_id == U1
    assert bundle.topic.progress_status == ProgressStatus.NOT_STARTED
    assert len(bundle.lesson.content.steps) == 5
    assert len(bundle.quiz.questions) == 5
    assert len(bundle.flashcards) == 8
    assert all(f.topic_id == bundle.topic.id for f in bundle.flashcards)
    assert all(f.user_id == U1 for f in bundle.flashcards)

    assert fake_ai.tasks_called()[0] == "lesson"
    assert sorted(fake_ai.tasks_called()[1:]) == ["flashcards", "quiz"]
    assert len(fake_db.rows("flashcards")) == 8


@pytest.mark.parametrize("title, level", [
    ("", "beginner"),
    ("   ", "beginner"),
    ("Photosynthesis", ""),
    (None, "beginner"),
    ("Photosynthesis", None),
])
async def test_generate_topic_missing_fields_fails_before_any_work(service, fake_ai, fake_db, title, level):
    with pytest.raises(ValidationError):
        await service.generate_topic(U1, title, level)
    assert fake_ai.calls == []
    assert fake_db.rows("topics") == []


async def test_generate_topic_invalid_level(service, fake_ai, fake_db):
    with pytest.raises(ValidationError):
        await service.generate_topic(U1, "Photosynthesis", "expert")
    assert fake_ai.calls == []
    assert fake_db.rows("topics") == []


async def test_generate_topic_partial_failure_keeps_created_records(service, fake_ai, fake_db):
    fake_ai.replies["quiz"] = "not json at all"

    with pytest.raises(ContentGenerationError):
        await service.generate_topic(U1, "Photosynthesis", "beginner")

    assert len(fake_db.rows("topics")) == 1
    assert len(fake_db.rows("lessons")) == 1
    assert fake_db.rows("quizzes") == []


async def test_generate_topic_writes_generation_log(service, env):
    await service.generate_topic(U1, "Photosynthesis", "beginner")

    log = json.loads((env / "topic_generation_logs.json").read_text())
    entry = log["items"][-1]
    assert entry["status"] == "success"
    assert entry["title"] == "Photosynthesis"
    assert entry["flashcards"] == 8
    assert "timestamp" in entry


async def test_generate_topic_quiz_under_wrong_key_is_not_stored(service, fake_ai, fake_db):
    fake_ai.replies["quiz"] = json.dumps({
        "quiz": [{"question": "Q?", "options": ["A", "B", "C", "D"], "correctIndex": 1, "explanation": ""}]
    })

    with pytest.raises(ContentGenerationError):
        await service.generate_topic(U1, "Photosynthesis", "beginner")

    assert fake_db.rows("quizzes") == []
    assert fake_db.rows("flashcards") == []


async def test_generate_topic_failure_cancels_sibling_generation(service, fake_ai, fake_db):
    default_cards = fake_ai.replies["flashcards"]
    flashcards = {"started": False, "cancelled": False, "finished": False}

    async def slow_flashcards():
        flashcards["started"] = True
        try:
            await asyncio.sleep(0.3)
        except asyncio.CancelledError:
            flashcards["cancelled"] = True
            raise
        flashcards["finished"] = True
        return default_cards

    fake_ai.replies["quiz"] = RuntimeError("provider down")
    fake_ai.replies["flashcards"] = slow_flashcards

    with pytest.raises(ContentGenerationError):
        await service.generate_topic(U1, "Photosynthesis", "beginner")

    assert flashcards["started"] and flashcards["cancelled"]
    await asyncio.sleep(0.35)
    assert flashcards["finished"] is False
    assert fake_db.rows("flashcards") == []


async def test_generate_topic_both_siblings_fail(service, fake_ai):
    fake_ai.replies["quiz"] = RuntimeError("provider down")
    fake_ai.replies["flashcards"] = RuntimeError("provider down")

    with pytest.raises(ContentGenerationError) as exc:
        await service.generate_topic(U1, "Photosynthesis", "beginner")
    assert exc.value.message == "Failed to generate quiz"


async def test_concurrent_generations_each_logged(service, env):
    await asyncio.gather(
        service.generate_topic(U1, "Cells", "beginner"),
        service.generate_topic(U2, "Stars", "advanced"),
    )

    log = json.loads((env / "topic_generation_logs.json").read_text())
    assert sorted(e["title"] for e in log["items"]) == ["Cells", "Stars"]


async def test_gather_or_cancel_returns_results_in_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await gather_or_cancel(value("a", 0.02), value("b", 0)) == ["a", "b"]


# ── Access ────────────────────────────────────────────────────────────────────

async def test_get_topic_other_user_forbidden(service, topic_id):
    with pytest.raises(ForbiddenError):
        await service.get_topic(U2, topic_id)


async def test_get_topic_missing(service):
    with pytest.raises(NotFoundError):
        await service.get_topic(U1, "does-not-exist")


async def test_get_topic_returns_bundle(service, topic_id):
    bundle = await service.get_topic(U1, topic_id)
    assert bundle.topic.id == topic_id
    assert bundle.lesson.topic_id == topic_id
    assert len(bundle.quiz.questions) == 5
    assert len(bundle.flashcards) == 8


async def test_list_topics_newest_first_and_scoped_to_user(service):
    first = await service.generate_topic(U1, "Cells", "beginner")
    second = await service.generate_topic(U1, "Atoms", "advanced")
    await service.generate_topic(U2, "Stars", "intermediate")

    topics = await service.list_topics(U1)
    assert [t.id for t in topics] == [second.topic.id, first.topic.id]


async def test_delete_topic_cascades(service, topic_id, fake_db):
    from services.doubt_service import DoubtService
    await DoubtService().ask_doubt(U1, topic_id, "What is chlorophyll?")

    await service.delete_topic(U1, topic_id)

    with pytest.raises(NotFoundError):
        await service.get_topic(U1, topic_id)
    for table in ("lessons", "quizzes", "flashcards", "doubts"):
        assert [r for r in fake_db.rows(table) if r["topic_id"] == topic_id] == []


async def test_delete_topic_other_user_forbidden(service, topic_id, fake_db):
    with pytest.raises(ForbiddenError):
        await service.delete_topic(U2, topic_id)
    assert len(fake_db.rows("topics")) == 1


# ── Updates ───────────────────────────────────────────────────────────────────

async def test_toggle_bookmark_twice_restores_original(service, topic_id):
    assert await service.toggle_bookmark(U1, topic_id) is True
    assert await service.toggle_bookmark(U1, topic_id) is False


async def test_update_notes(service, topic_id):
    assert await service.update_notes(U1, topic_id, "Remember the Calvin cycle") == "Remember the Calvin cycle"
    bundle = await service.get_topic(U1, topic_id)
    assert bundle.topic.notes == "Remember the Calvin cycle"


async def test_update_progress_valid(service, topic_id):
    assert await service.update_progress(U1, topic_id, "understood") == ProgressStatus.UNDERSTOOD
    bundle = await service.get_topic(U1, topic_id)
    assert bundle.topic.progress_status == ProgressStatus.UNDERSTOOD


@pytest.mark.parametrize("status", ["done", "", None, "Understood"])
async def test_update_progress_invalid(service, topic_id, status):
    with pytest.raises(ValidationError):
        await service.update_progress(U1, topic_id, status)
    bundle = await service.get_topic(U1, topic_id)
    assert bundle.topic.progress_status == ProgressStatus.NOT_STARTED


async def test_update_progress_other_user_forbidden(service, topic_id):
    with pytest.raises(ForbiddenError):
        await service.update_progress(U2, topic_id, "understood")


# ── Explanations and lesson-based boosts ──────────────────────────────────────

async def test_explain_requires_text(service, fake_ai):
    with pytest.raises(ValidationError):
        await service.explain_simply("  ", "Photosynthesis")
    with pytest.raises(ValidationError):
        await service.explain_in_language("text", None)
    with pytest.raises(ValidationError):
        await service.ask_about_text("text", "")
    assert fake_ai.calls == []


async def test_key_points_and_keywords(service, topic_id):
    assert "Glucose" in await service.generate_key_points(U1, topic_id)
    assert await service.extract_keywords(U1, topic_id) == ["photosynthesis", "chlorophyll", "glucose"]


async def test_topic_qa_uses_flattened_lesson(service, topic_id, fake_ai):
    qa = await service.generate_topic_qa(U1, topic_id)

    assert len(qa) == 5
    prompt = fake_ai.calls[-1]["user_prompt"]
    assert "Step 1: Stage 1 of the process." in prompt
    assert "Key Points:\nLight is absorbed" in prompt


async def test_lesson_boosts_check_ownership(service, topic_id):
    with pytest.raises(ForbiddenError):
        await service.generate_key_points(U2, topic_id)
    with pytest.raises(ForbiddenError):
        await service.extract_keywords(U2, topic_id)
    with pytest.raises(ForbiddenError):
        await service.generate_topic_qa(U2, topic_id)


async def test_lesson_boost_without_lesson(service, topic_id, fake_db):
    fake_db.tables["lessons"].clear()
    with pytest.raises(NotFoundError):
        await service.generate_key_points(U1, topic_id)
