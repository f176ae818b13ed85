from services.ai_service import AIService
from services.topic_service import TopicService
from services.doubt_service import DoubtService
from services.flashcard_service import FlashcardService
from services.youtube_service import YouTubeService
from services.books_service import BooksService
from services.tts_service import TTSService

__all__ = [
    'AIService',
    'TopicService',
    'DoubtService',
    'FlashcardService',
    'YouTubeService',
    'BooksService',
    'TTSService'
]
