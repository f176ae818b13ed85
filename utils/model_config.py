"""
Model configuration for the AI tutor.
One provider model, with sampling settings per content task.
"""

import os
from typing import Dict, Any, Optional
from enum import Enum


class TutorTask(str, Enum):
    LESSON = "lesson"
    QUIZ = "quiz"
    FLASHCARDS = "flashcards"
    ANSWER_DOUBT = "answer_doubt"
    EXPLAIN_SIMPLY = "explain_simply"
    EXPLAIN_WITH_EXAMPLE = "explain_with_example"
    EXPLAIN_IN_LANGUAGE = "explain_in_language"
    KEY_POINTS = "key_points"
    KEYWORDS = "keywords"
    ASK_ABOUT_TEXT = "ask_about_text"
    GENERATE_QA = "generate_qa"


DEFAULT_MODEL = "llama-3.3-70b-versatile"

# max_tokens of None leaves the provider default in place
TASK_CONFIGS: Dict[TutorTask, Dict[str, Any]] = {
    TutorTask.LESSON: {"temperature": 0.7, "max_tokens": None},
    TutorTask.QUIZ: {"temperature": 0.7, "max_tokens": None},
    TutorTask.FLASHCARDS: {"temperature": 0.7, "max_tokens": None},
    TutorTask.ANSWER_DOUBT: {"temperature": 0.7, "max_tokens": 1000},
    TutorTask.EXPLAIN_SIMPLY: {"temperature": 0.7, "max_tokens": 250},
    TutorTask.EXPLAIN_WITH_EXAMPLE: {"temperature": 0.8, "max_tokens": 300},
    TutorTask.EXPLAIN_IN_LANGUAGE: {"temperature": 0.7, "max_tokens": 400},
    TutorTask.KEY_POINTS: {"temperature": 0.6, "max_tokens": 500},
    TutorTask.KEYWORDS: {"temperature": 0.5, "max_tokens": 200},
    TutorTask.ASK_ABOUT_TEXT: {"temperature": 0.7, "max_tokens": 400},
    TutorTask.GENERATE_QA: {"temperature": 0.7, "max_tokens": 1000},
}


class ModelConfig:
    """Model configuration manager"""

    @staticmethod
    def get_model(model_key: Optional[str] = None) -> str:
        """Model id sent to the provider; TUTOR_MODEL overrides the default."""
        return model_key or os.getenv("TUTOR_MODEL") or DEFAULT_MODEL

    @staticmethod
    def get_config(task: TutorTask) -> Dict[str, Any]:
        """Get sampling settings for a task, with the model id filled in"""
        if task not in TASK_CONFIGS:
            raise ValueError(f"Unknown task: {task}. Available: {[t.value for t in TASK_CONFIGS]}")

        return {"model": ModelConfig.get_model(), **TASK_CONFIGS[task]}
