"""
Memory Module
Persistent caches for learned answers and video summaries.
"""

from .learning_store import LearnedAnswerStore, VideoAnswerCache, normalize_question

__all__ = [
    "LearnedAnswerStore",
    "VideoAnswerCache",
    "normalize_question"
]
