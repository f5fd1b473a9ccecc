"""
Helpers for text that arrives from upstream extractors (OCR, PDF, speech-to-text).
"""

import re
from typing import Dict, List, Optional

PDF_CONTEXT_CHARS = 2000

SOURCE_KINDS = ("image", "audio", "video", "pdf")

QUESTION_START = re.compile(r"^\d+[.)]")
QUESTION_MARKERS = ("question", "solve", "find")


def _starts_question(line: str) -> bool:
    lowered = line.lower()
    return (bool(QUESTION_START.match(line)) or "?" in line
            or any(marker in lowered for marker in QUESTION_MARKERS))


def extract_questions(text: str) -> List[Dict[str, object]]:
    """
    Split extracted document text into questions.

    A line opens a new question when it is numbered ("3." / "3)") or mentions
    "question", "solve", "find" or contains "?". Following non-empty lines are
    joined onto the open question. Lines before the first question are ignored.

    Returns:
        [{"number": 0, "text": "..."}, ...]
    """
    questions = []
    current = ""

    for line in (text or "").split("\n"):
        stripped = line.strip()

        if _starts_question(stripped):
            if current:
                questions.append({"number": len(questions), "text": current.strip()})
            current = stripped
        elif current and stripped:
            current += " " + stripped

    if current:
        questions.append({"number": len(questions), "text": current.strip()})

    return questions


def build_source_context(kind: str, text: str, pages: Optional[int] = None) -> str:
    """
    Provenance context handed to the LLM alongside a question.

    Args:
        kind: One of SOURCE_KINDS
        text: Extracted text
        pages: Page count (pdf only)
    """
    if kind == "image":
        return f"This question was extracted from an image. Original extracted text: {text}"
    if kind == "audio":
        return f"This question was transcribed from an audio message. Original transcript: {text}"
    if kind == "video":
        return f"This question was transcribed from a video. Original transcript: {text}"
    if kind == "pdf":
        return f"Context from PDF ({pages or 'unknown'} pages):\n{text[:PDF_CONTEXT_CHARS]}..."
    raise ValueError(f"Unsupported source kind: {kind}")
