"""
Answer Formatter
Renders every result shape the pipeline produces into one display string.
Never raises: an unrecognised shape is dumped as JSON (or repr as a last resort).
"""

import json
from dataclasses import asdict, is_dataclass
from typing import Any

from rag.dataset_search import DatasetMatch


def _format_dataset_match(match: DatasetMatch) -> str:
    formatted = match.answer
    if match.class_name:
        formatted = f"[Class {match.class_name}] {formatted}"
    if match.subject:
        formatted = f"{formatted}\n\nSubject: {match.subject}"
    if match.chapter:
        formatted = f"{formatted}\nChapter: {match.chapter}"
    return formatted


def _format_steps(steps, answer) -> str:
    formatted = "**Solution Steps:**\n\n"
    for index, step in enumerate(steps, 1):
        formatted += f"{index}. {step}\n"
    if answer:
        formatted += f"\n**Answer:** {answer}"
    return formatted


def _dump(data: Any) -> str:
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def format_answer(data: Any) -> str:
    """
    Format a pipeline result for display.

    Args:
        data: str (LLM text), DatasetMatch, a solver solution, a dict with an
            "answer" (and optionally "steps"/dataset fields), or anything else

    Returns:
        Display string
    """
    try:
        if isinstance(data, str):
            return data

        if isinstance(data, DatasetMatch) and data.found and data.answer:
            return _format_dataset_match(data)

        # Solver solutions: steps plus final_answer
        if isinstance(getattr(data, "steps", None), list):
            return _format_steps(data.steps, getattr(data, "final_answer", None))

        if isinstance(data, dict):
            if data.get("found") and data.get("answer"):
                return _format_dataset_match(DatasetMatch(
                    found=True,
                    class_name=data.get("class"),
                    subject=data.get("subject"),
                    chapter=data.get("chapter"),
                    answer=data["answer"],
                ))
            if isinstance(data.get("steps"), list):
                return _format_steps(data["steps"], data.get("answer"))
            if data.get("answer"):
                return str(data["answer"])

        answer = getattr(data, "answer", None)
        if answer:
            return str(answer)

        return _dump(data)
    except Exception:
        return repr(data)
