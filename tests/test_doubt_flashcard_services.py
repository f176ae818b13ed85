"""
Tests for the doubt workflow and flashcard review.

Run with:
    python3 -m pytest tests/test_doubt_flashcard_services.py -v
"""

import pytest

from models.tutor_models import FlashcardStatus
from services.doubt_service import DoubtService
from services.flashcard_service import FlashcardService
from services.topic_service import TopicService
from utils.exceptions import AIServiceError, ForbiddenError, NotFoundError, ValidationError

U1 = "user-1"
U2 = "user-2"


@pytest.fixture
async def topic_id() -> str:
    bundle = await TopicService().generate_topic(U1, "Photosynthesis", "beginner")
    return bundle.topic.id


# ── Doubts ────────────────────────────────────────────────────────────────────

async def test_ask_doubt_scenario(topic_id):
    service = DoubtService()
    await service.ask_doubt(U1, topic_id, "Why are leaves green?")
    doubt = await service.ask_doubt(U1, topic_id, "What is chlorophyll?")

    assert doubt.question == "What is chlorophyll?"
    assert doubt.answer
    assert doubt.user_id == U1

    doubts = await service.list_doubts(U1, topic_id)
    assert [d.question for d in doubts] == ["What is chlorophyll?", "Why are leaves green?"]


@pytest.mark.parametrize("topic, question", [(None, "Why?"), ("some-id", ""), ("some-id", "   ")])
async def test_ask_doubt_missing_fields(topic, question, fake_ai):
    with pytest.raises(ValidationError):
        await DoubtService().ask_doubt(U1, topic, question)
    assert fake_ai.calls == []


async def test_ask_doubt_without_lesson_creates_nothing(topic_id, fake_db):
    fake_db.tables["lessons"].clear()

    with pytest.raises(NotFoundError):
        await DoubtService().ask_doubt(U1, topic_id, "What is chlorophyll?")
    assert fake_db.rows("doubts") == []


async def test_ask_doubt_other_user_forbidden(topic_id, fake_db):
    with pytest.raises(ForbiddenError):
        await DoubtService().ask_doubt(U2, topic_id, "What is chlorophyll?")
    assert fake_db.rows("doubts") == []


async def test_ask_doubt_provider_failure_is_503(topic_id, fake_ai, fake_db):
    fake_ai.replies["doubt"] = RuntimeError("rate limit reached")

    with pytest.raises(AIServiceError) as exc:
        await DoubtService().ask_doubt(U1, topic_id, "What is chlorophyll?")
    assert exc.value.status_code == 503
    assert exc.value.error_code == "AI_SERVICE_ERROR"
    assert exc.value.message == "Too many questions at once. Please wait a moment and try again."
    assert fake_db.rows("doubts") == []


async def test_list_doubts_other_user_forbidden(topic_id):
    with pytest.raises(ForbiddenError):
        await DoubtService().list_doubts(U2, topic_id)


# ── Flashcards ────────────────────────────────────────────────────────────────

async def test_get_flashcards_other_user_forbidden(topic_id):
    with pytest.raises(ForbiddenError):
        await FlashcardService().list_flashcards(U2, topic_id)


async def test_get_flashcards_other_user_forbidden_even_without_cards(topic_id, fake_db):
    fake_db.tables["flashcards"].clear()
    with pytest.raises(ForbiddenError):
        await FlashcardService().list_flashcards(U2, topic_id)


async def test_update_flashcard_status(topic_id):
    service = FlashcardService()
    card = (await service.list_flashcards(U1, topic_id))[0]

    updated = await service.update_status(U1, card.id, "mastered")
    assert updated.status == FlashcardStatus.MASTERED
    assert (await service.list_flashcards(U1, topic_id))[0].status == FlashcardStatus.MASTERED


@pytest.mark.parametrize("status", ["done", "", None, "MASTERED"])
async def test_update_flashcard_invalid_status_leaves_card_unchanged(topic_id, status):
    service = FlashcardService()
    card = (await service.list_flashcards(U1, topic_id))[0]

    with pytest.raises(ValidationError):
        await service.update_status(U1, card.id, status)
    assert (await service.list_flashcards(U1, topic_id))[0].status == FlashcardStatus.NEW


async def test_update_flashcard_missing():
    with pytest.raises(NotFoundError):
        await FlashcardService().update_status(U1, "no-such-card", "learning")


async def test_update_flashcard_checks_card_owner(topic_id, fake_db):
    service = FlashcardService()
    card = (await service.list_flashcards(U1, topic_id))[0]

    with pytest.raises(ForbiddenError):
        await service.update_status(U2, card.id, "learning")

    # ownership is taken from the card, not its topic
    for row in fake_db.rows("flashcards"):
        if row["id"] == card.id:
            row["user_id"] = U2
    updated = await service.update_status(U2, card.id, "learning")
    assert updated.status == FlashcardStatus.LEARNING
