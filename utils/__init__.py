# Tutor Utilities
from .storage import (
    TopicStorage,
    LessonStorage,
    QuizStorage,
    FlashcardStorage,
    DoubtStorage,
    GenerationLogger,
    generate_uuid,
    read_json_file,
    write_json_file
)

from .model_config import (
    ModelConfig,
    TutorTask,
    TASK_CONFIGS,
    DEFAULT_MODEL
)

__all__ = [
    'TopicStorage',
    'LessonStorage',
    'QuizStorage',
    'FlashcardStorage',
    'DoubtStorage',
    'GenerationLogger',
    'generate_uuid',
    'read_json_file',
    'write_json_file',
    'ModelConfig',
    'TutorTask',
    'TASK_CONFIGS',
    'DEFAULT_MODEL'
]
