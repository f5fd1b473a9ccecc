"""
Learning Store
JSON-file caches for previously answered questions and video summaries.

Both caches read the whole file on every lookup and rewrite it on every
write. A per-instance lock serialises read-modify-write cycles inside one
process; separate processes sharing a file still race (last write wins).
"""

import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def normalize_question(question: str) -> str:
    """Cache key for a question: lower-cased and trimmed."""
    return question.lower().strip()


class JsonRecordFile:
    """
    A flat JSON object on disk, read and rewritten in full.

    Read and write failures are logged and degrade to "empty" / "dropped".
    """

    def __init__(self, path):
        self.path = Path(path)
        self.lock = threading.Lock()

    def read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error reading %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Error reading %s: expected a JSON object", self.path)
            return {}
        return data

    def write(self, data: Dict[str, Any]) -> bool:
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            return True
        except OSError as e:
            logger.error("Error writing %s: %s", self.path, e)
            return False


class LearnedAnswerStore:
    """
    Write-once cache of AI answers to generic (context-free) questions.

    Records are keyed by the normalized question:
        {"question": ..., "answer": ..., "source": ..., "learnedAt": <epoch ms>}
    """

    def __init__(self, path):
        self.records = JsonRecordFile(path)

    def find(self, question: str) -> Optional[Dict[str, Any]]:
        """
        Exact, case/whitespace-insensitive lookup.

        Args:
            question: Question text as asked

        Returns:
            Cached record or None
        """
        normalized = normalize_question(question)
        cache = self.records.read()

        if normalized in cache:
            return cache[normalized]

        # Keys edited by hand may not be normalized.
        for key, record in cache.items():
            if normalize_question(key) == normalized:
                return record
        return None

    def learn(self, question: str, answer: str, source: str = "ai") -> bool:
        """
        Remember an answer unless the question is already known.

        Returns:
            True if a new record was written
        """
        normalized = normalize_question(question)

        with self.records.lock:
            cache = self.records.read()
            if normalized in cache:
                return False

            cache[normalized] = {
                "question": question,
                "answer": answer,
                "source": source,
                "learnedAt": int(time.time() * 1000),
            }
            written = self.records.write(cache)

        if written:
            logger.info("Learned new Q&A: \"%s...\"", question[:30])
        return written


class VideoAnswerCache:
    """
    Cache of video summaries/answers keyed by (video id, question or "summary").

    Unlike LearnedAnswerStore, entries are overwritten on every save.
    """

    def __init__(self, path):
        self.records = JsonRecordFile(path)

    @staticmethod
    def _key(video_id: str, question: Optional[str]) -> str:
        return f"{video_id}_{question or 'summary'}"

    def get(self, video_id: str, question: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return self.records.read().get(self._key(video_id, question))

    def save(self, video_id: str, question: Optional[str], data: Dict[str, Any]) -> bool:
        key = self._key(video_id, question)

        with self.records.lock:
            cache = self.records.read()
            cache[key] = {**data, "cachedAt": int(time.time() * 1000)}
            written = self.records.write(cache)

        if written:
            logger.info("Saved video answer to cache: %s", key)
        return written
