"""
Pydantic models for the AI tutor.
Stored records use snake_case columns; API JSON uses camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Enums for type safety and validation
class TopicLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProgressStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    UNDERSTOOD = "understood"
    REVISE_LATER = "revise-later"


class FlashcardStatus(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    MASTERED = "mastered"


class ExplainLanguage(str, Enum):
    HINDI = "hindi"
    HINGLISH = "hinglish"


class TutorModel(BaseModel):
    """Base for everything that crosses the HTTP boundary"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Lesson content (AI-generated)
class LessonStep(TutorModel):
    title: str = ""
    content: str = ""


class LessonContent(TutorModel):
    """Structured lesson: intro, 4-6 steps, 2 analogies, 5 summary points"""
    introduction: str
    steps: List[LessonStep] = []
    analogies: List[str] = []
    summary: List[str] = []


class QuizQuestion(TutorModel):
    """Four-option multiple choice question"""
    question: str
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_index: int = Field(..., ge=0, le=3)
    explanation: str = ""


class FlashcardDraft(TutorModel):
    front: str
    back: str


class QAPair(TutorModel):
    question: str
    answer: str


# Stored records
class Topic(TutorModel):
    id: str
    user_id: str
    title: str
    level: TopicLevel
    is_bookmarked: bool = False
    notes: str = ""
    progress_status: ProgressStatus = ProgressStatus.NOT_STARTED
    created_at: datetime = Field(default_factory=utc_now)


class Lesson(TutorModel):
    id: str
    topic_id: str
    content: LessonContent
    created_at: datetime = Field(default_factory=utc_now)


class Quiz(TutorModel):
    id: str
    topic_id: str
    questions: List[QuizQuestion] = []
    created_at: datetime = Field(default_factory=utc_now)


class Flashcard(TutorModel):
    id: str
    topic_id: str
    user_id: str
    front: str
    back: str
    status: FlashcardStatus = FlashcardStatus.NEW
    created_at: datetime = Field(default_factory=utc_now)


class Doubt(TutorModel):
    id: str
    topic_id: str
    user_id: str
    question: str
    answer: str
    created_at: datetime = Field(default_factory=utc_now)


# Request Models
# Fields are optional so that missing values reach the services and are
# reported as domain validation errors (400) rather than schema errors.
class GenerateTopicRequest(TutorModel):
    title: Optional[str] = None
    level: Optional[str] = None


class NotesUpdateRequest(TutorModel):
    notes: Optional[str] = None


class StatusUpdateRequest(TutorModel):
    status: Optional[str] = None


class ExplainRequest(TutorModel):
    text: Optional[str] = None
    topic_title: Optional[str] = ""


class ExplainLanguageRequest(ExplainRequest):
    language: Optional[str] = None


class AskAboutTextRequest(ExplainRequest):
    question: Optional[str] = None


class AskDoubtRequest(TutorModel):
    topic_id: Optional[str] = None
    question: Optional[str] = None


class TTSRequest(TutorModel):
    text: Optional[str] = None


# Response Models
class TopicBundle(TutorModel):
    """Topic with its generated children"""
    topic: Topic
    lesson: Optional[Lesson] = None
    quiz: Optional[Quiz] = None
    flashcards: List[Flashcard] = []


class TopicGenerationResponse(TopicBundle):
    message: str = "Topic generated successfully!"


class MessageResponse(TutorModel):
    message: str


class BookmarkResponse(TutorModel):
    is_bookmarked: bool


class NotesResponse(TutorModel):
    notes: str


class ProgressResponse(TutorModel):
    progress_status: ProgressStatus


class ExplanationResponse(TutorModel):
    explanation: str


class AnswerResponse(TutorModel):
    answer: str


class KeyPointsResponse(TutorModel):
    key_points: str


class KeywordsResponse(TutorModel):
    keywords: List[str]


class QAListResponse(TutorModel):
    qa_list: List[QAPair]


class TTSResponse(TutorModel):
    audio_urls: List[str]
    chunks: int
    text: str


class VideoSearchResponse(TutorModel):
    success: bool = True
    count: int
    videos: List[Dict[str, Any]]


class BookSearchResponse(TutorModel):
    success: bool = True
    count: int
    books: List[Dict[str, Any]]
