"""
Tests for utils/source_context.py
"""

import pytest

from utils.source_context import build_source_context, extract_questions


def test_extract_questions_groups_continuation_lines():
    text = "\n".join([
        "Chapter 4 Exercises",
        "1. A train travels 60 km",
        "in one hour.",
        "",
        "2) What is its speed?",
        "Find the time taken for 120 km",
        "at the same speed",
    ])
    questions = extract_questions(text)
    assert questions == [
        {"number": 0, "text": "1. A train travels 60 km in one hour."},
        {"number": 1, "text": "2) What is its speed?"},
        {"number": 2, "text": "Find the time taken for 120 km at the same speed"},
    ]


def test_extract_questions_empty():
    assert extract_questions("") == []
    assert extract_questions(None) == []


@pytest.mark.parametrize("kind, phrase", [
    ("image", "extracted from an image"),
    ("audio", "transcribed from an audio message"),
    ("video", "transcribed from a video"),
])
def test_media_contexts(kind, phrase):
    context = build_source_context(kind, "what is mitosis")
    assert phrase in context
    assert context.endswith("what is mitosis")


def test_pdf_context_is_truncated():
    context = build_source_context("pdf", "x" * 5000, pages=12)
    assert context.startswith("Context from PDF (12 pages):\n")
    assert context.endswith("\n" + "x" * 2000 + "...")


def test_unknown_kind():
    with pytest.raises(ValueError):
        build_source_context("fax", "text")
