"""
Shared pytest fixtures.

Puts the project root on sys.path, sets a dummy GROQ_API_KEY so importing the
LLM layer never fails, and provides a fake chat client so no test touches the
network.
"""

import json
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("GROQ_API_KEY", "test-key")

from agents.orchestrator import PipelineContext, QueryResolver  # noqa: E402
from config.settings import Settings  # noqa: E402
from llm.answer_gateway import AnswerGateway  # noqa: E402
from memory.learning_store import LearnedAnswerStore, VideoAnswerCache  # noqa: E402
from rag.dataset_search import CuratedDataset  # noqa: E402


class FakeChatClient:
    """Records chat() calls and replies with a canned answer or raises."""

    def __init__(self, reply="This is a generated answer.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def chat(self, messages, model=None, temperature=0.3, max_tokens=2000):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_client():
    return FakeChatClient()


@pytest.fixture
def dataset_dir(tmp_path):
    root = tmp_path / "data"
    (root / "class_10").mkdir(parents=True)
    (root / "class_9").mkdir(parents=True)

    (root / "class_10" / "science.json").write_text(json.dumps({
        "class": 10,
        "subject": "Science",
        "chapter_name": "Life Processes",
        "topics": [
            {"title": "Nutrition", "notes": ["Photosynthesis converts light energy into chemical energy."]},
        ],
    }), encoding="utf-8")
    (root / "class_9" / "history.json").write_text(json.dumps({
        "class": 9,
        "subject": "History",
        "chapter": "The French Revolution",
        "summary": "The French Revolution began in 1789.",
    }), encoding="utf-8")
    (root / "class_9" / "broken.json").write_text("{not json", encoding="utf-8")
    return root


def build_pipeline(tmp_path, client, dataset=None):
    settings = Settings(cache_dir=tmp_path / "cache")
    context = PipelineContext(
        dataset=dataset if dataset is not None else CuratedDataset(),
        learned_answers=LearnedAnswerStore(settings.learned_qa_file),
        video_cache=VideoAnswerCache(settings.video_cache_file),
        gateway=AnswerGateway(client, settings=settings),
    )
    return QueryResolver(context)


@pytest.fixture
def resolver(tmp_path, fake_client):
    return build_pipeline(tmp_path, fake_client)


@pytest.fixture
def make_client():
    """FakeChatClient constructor, for tests needing a specific reply or error."""
    return FakeChatClient


@pytest.fixture
def make_resolver(tmp_path):
    def _make(client=None, dataset=None):
        return build_pipeline(tmp_path, client or FakeChatClient(), dataset)
    return _make
