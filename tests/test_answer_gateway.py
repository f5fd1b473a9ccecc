"""
Tests for llm/answer_gateway.py, llm/prompts.py and error classification in llm/groq_client.py
"""

import pytest

from config.settings import DEFAULT_MODEL, Settings
from llm.answer_gateway import FAILURE_MESSAGES, AnswerGateway, GatewayResult, history_messages
from llm.groq_client import FailureKind, GroqClient, classify_error
from llm.prompts import CURRICULUM_SCOPE_PROMPT, MATH_TUTOR_PROMPT, build_system_prompt
from utils.language_detector import DetectedLanguage

HINDI = DetectedLanguage("Hindi", "hi", 1.0)
ENGLISH = DetectedLanguage("English", "en", 1.0)


class StatusError(Exception):
    def __init__(self, message="boom", status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def test_math_prompt_and_sampling(make_client):
    client = make_client(reply="x = 7")
    result = AnswerGateway(client).ask("2x - 4 = 10", is_math_problem=True, language=ENGLISH)

    assert result == GatewayResult(ok=True, text="x = 7")
    call = client.calls[0]
    assert call["temperature"] == 0.1
    assert call["max_tokens"] == 1500
    assert call["messages"][0]["content"] == MATH_TUTOR_PROMPT


def test_general_prompt_and_sampling(make_client):
    client = make_client()
    AnswerGateway(client).ask("What is gravity?", language=ENGLISH)

    call = client.calls[0]
    assert call["temperature"] == 0.3
    assert call["max_tokens"] == 2000
    assert CURRICULUM_SCOPE_PROMPT in call["messages"][0]["content"]


def test_sampling_comes_from_settings(make_client):
    client = make_client()
    settings = Settings(general_temperature=0.9, general_max_tokens=10)
    AnswerGateway(client, settings=settings).ask("hi", language=ENGLISH)
    assert client.calls[0]["temperature"] == 0.9
    assert client.calls[0]["max_tokens"] == 10


def test_custom_prompt_wins_and_gets_language_instruction():
    prompt = build_system_prompt(HINDI, is_math_problem=True, custom_prompt="Be brief.")
    assert prompt.startswith("Be brief.")
    assert "Respond in Hindi (hi)." in prompt
    assert MATH_TUTOR_PROMPT not in prompt


def test_custom_prompt_in_english_is_untouched():
    assert build_system_prompt(ENGLISH, custom_prompt="Be brief.") == "Be brief."


def test_context_is_appended_verbatim():
    prompt = build_system_prompt(ENGLISH, context="PAGE 1 TEXT")
    assert prompt.endswith("Additional context from the source material:\nPAGE 1 TEXT")


def test_message_order_history_then_question(make_client):
    client = make_client()
    history = [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "reply"},
        {"role": "system", "content": "sneaky"},
        "garbage",
    ]
    AnswerGateway(client).ask("second", language=ENGLISH, history=history)

    roles = [m["role"] for m in client.calls[0]["messages"]]
    contents = [m["content"] for m in client.calls[0]["messages"]][1:]
    assert roles == ["system", "user", "assistant", "user"]
    assert contents == ["first", "reply", "second"]


def test_language_detected_when_not_given(make_client):
    client = make_client()
    AnswerGateway(client).ask("प्रकाश संश्लेषण क्या है", is_math_problem=True)
    assert "Respond in Hindi (hi)." in client.calls[0]["messages"][0]["content"]


def test_history_messages_handles_none():
    assert history_messages(None) == []


@pytest.mark.parametrize("error, kind", [
    (StatusError(status_code=401), FailureKind.AUTH),
    (StatusError("Invalid API Key"), FailureKind.AUTH),
    (StatusError(status_code=400, body={"error": {"code": "invalid_api_key"}}), FailureKind.AUTH),
    (StatusError(status_code=404, body={"error": {"code": "model_not_found"}}), FailureKind.MODEL_NOT_FOUND),
    (StatusError(status_code=429), FailureKind.RATE_LIMITED),
    (RuntimeError("connection reset"), FailureKind.UNKNOWN),
])
def test_classify_error(error, kind):
    assert classify_error(error) == kind


@pytest.mark.parametrize("error, kind", [
    (StatusError(status_code=401), FailureKind.AUTH),
    (StatusError(status_code=429), FailureKind.RATE_LIMITED),
    (TimeoutError("slow"), FailureKind.UNKNOWN),
])
def test_failures_become_tagged_results(make_client, error, kind):
    client = make_client(error=error)
    result = AnswerGateway(client).ask("What is gravity?", language=ENGLISH)
    assert not result.ok
    assert result.failure == kind
    assert result.text == FAILURE_MESSAGES[kind]
    assert len(client.calls) == 1


def test_empty_reply_is_a_failure(make_client):
    result = AnswerGateway(make_client(reply="  ")).ask("q", language=ENGLISH)
    assert result.failure == FailureKind.UNKNOWN


def test_repetition_is_suppressed(make_client):
    looping = (
        "Sentence one is here now. Sentence two is here now. Sentence three is here. "
        "Sentence four is here now. Sentence one is here now."
    )
    result = AnswerGateway(make_client(reply=looping)).ask("q", language=ENGLISH)
    assert result.text == "Sentence one is here now. Sentence two is here now."


def test_groq_client_requires_api_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(ValueError):
        GroqClient(api_key=None)


def test_groq_client_defaults_to_configured_model():
    client = GroqClient(api_key="test-key")
    assert client.default_model == DEFAULT_MODEL


def test_failed_result_carries_user_message_as_text():
    result = GatewayResult.failed(FailureKind.AUTH)
    assert not result.ok
    assert result.failure == FailureKind.AUTH
    assert result.text == FAILURE_MESSAGES[FailureKind.AUTH]
