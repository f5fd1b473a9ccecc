"""
Repetition suppression for generated answers.

Small models sometimes loop and restate earlier sentences near the end of a
long answer. remove_repetitive_content() cuts the answer back when that
happens. It only ever returns a prefix of its input.
"""

import logging
import re
from typing import List, Tuple

logger = logging.getLogger(__name__)

# Latin terminators plus the Devanagari danda.
SENTENCE_BOUNDARY = re.compile(r"[।.!?]\s+")

MIN_TEXT_LENGTH = 100
MIN_SENTENCE_LENGTH = 10
MIN_SENTENCES = 3
KEY_LENGTH = 50
MIN_REPEAT_DISTANCE = 2


def split_sentences(text: str) -> List[Tuple[str, int]]:
    """
    Split text into sentence-like units.

    Returns:
        (sentence, end offset in text) pairs; the end offset includes the
        terminator. Fragments shorter than MIN_SENTENCE_LENGTH are dropped.
    """
    units = []
    start = 0
    for boundary in SENTENCE_BOUNDARY.finditer(text):
        units.append((text[start:boundary.start()], boundary.start() + 1))
        start = boundary.end()
    units.append((text[start:], len(text)))

    return [(sentence, end) for sentence, end in units if len(sentence.strip()) >= MIN_SENTENCE_LENGTH]


def remove_repetitive_content(text: str) -> str:
    """
    Truncate runaway repetition.

    A repeat counts as runaway when it appears more than two sentences after
    its first occurrence and in the second half of the answer. The answer is
    then cut after the sentence that followed the first occurrence.

    Args:
        text: Generated answer

    Returns:
        text unchanged, or a prefix of it
    """
    if not text or len(text) < MIN_TEXT_LENGTH:
        return text

    sentences = split_sentences(text)
    if len(sentences) < MIN_SENTENCES:
        return text

    seen = {}
    for index, (sentence, _) in enumerate(sentences):
        # Keys ignore trailing terminators: splitting consumes them from every
        # unit except the last, so a repeated final sentence must still match.
        key = sentence.strip().rstrip("।.!?")[:KEY_LENGTH]

        if key not in seen:
            seen[key] = index
            continue

        first_index = seen[key]
        if index - first_index > MIN_REPEAT_DISTANCE and index > len(sentences) / 2:
            keep = first_index + 2
            logger.warning("Detected repetitive content, truncated response")
            return text[:sentences[keep - 1][1]]

    return text
