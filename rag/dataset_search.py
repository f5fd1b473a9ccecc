"""
Curated Dataset Search
Loads the class/subject JSON hierarchy and answers questions by substring match.

Layout on disk:
    data/
      class_10/
        science.json
        maths.json
      class_11/
        ...

Each document is an arbitrarily nested JSON record. Optional metadata fields:
"class", "subject", "chapter_name" (or "chapter").
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_CHAPTER = "Multiple sections"


@dataclass(frozen=True)
class DatasetMatch:
    found: bool
    class_name: Optional[str] = None
    subject: Optional[str] = None
    chapter: Optional[str] = None
    answer: Optional[str] = None


NO_MATCH = DatasetMatch(found=False)


def iter_strings(node: Any) -> Iterator[str]:
    """Depth-first walk yielding every string leaf (dict values and list items)."""
    if isinstance(node, str):
        yield node
    elif isinstance(node, dict):
        for value in node.values():
            yield from iter_strings(value)
    elif isinstance(node, list):
        for item in node:
            yield from iter_strings(item)


def deep_search(document: Any, query: str) -> List[str]:
    """
    Collect every string leaf containing query.

    Args:
        document: Nested record
        query: Lower-cased search text

    Returns:
        Matching strings in walk order
    """
    return [text for text in iter_strings(document) if query in text.lower()]


class CuratedDataset:
    """
    Read-only, in-memory reference corpus.

    Documents keep their load order; search returns the first document with
    any match and that document's first matching string. No ranking.
    """

    def __init__(self, documents: Sequence[Any] = ()):
        self._documents = tuple(documents)

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> Sequence[Any]:
        return self._documents

    @classmethod
    def load(cls, data_dir) -> "CuratedDataset":
        """
        Walk data_dir/<class>/<subject>.json in sorted order.

        Broken documents are skipped with a warning; a missing directory gives
        an empty dataset.
        """
        data_dir = Path(data_dir)
        documents = []

        if not data_dir.is_dir():
            logger.warning("Dataset folder not found: %s", data_dir)
            return cls(documents)

        for class_dir in sorted(p for p in data_dir.iterdir() if p.is_dir()):
            for file_path in sorted(class_dir.glob("*.json")):
                try:
                    with open(file_path, 'r', encoding='utf-8') as f:
                        documents.append(json.load(f))
                except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                    logger.warning("Broken JSON skipped: %s (%s)", file_path, e)

        logger.info("Dataset loaded: %d documents from %s", len(documents), data_dir)
        return cls(documents)

    def search(self, question: str) -> DatasetMatch:
        """
        Find the first document containing the question text.

        Args:
            question: Question text (matched case-insensitively)

        Returns:
            DatasetMatch (found=False when nothing matches)
        """
        query = question.lower()

        for document in self._documents:
            matches = deep_search(document, query)
            if not matches:
                continue

            metadata = document if isinstance(document, dict) else {}
            return DatasetMatch(
                found=True,
                class_name=_as_text(metadata.get("class")),
                subject=_as_text(metadata.get("subject")),
                chapter=_as_text(metadata.get("chapter_name") or metadata.get("chapter")) or DEFAULT_CHAPTER,
                answer=matches[0],
            )

        return NO_MATCH


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
