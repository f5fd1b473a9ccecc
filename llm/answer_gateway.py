"""
Answer Gateway
Builds the prompt, calls the LLM once, and returns a tagged result.

Failures are never raised to callers: they come back as a GatewayResult with
ok=False, a FailureKind and a user-safe message.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from config.settings import Settings
from llm.groq_client import FailureKind, classify_error
from llm.prompts import build_system_prompt
from llm.repetition import remove_repetitive_content
from utils.language_detector import DetectedLanguage, LanguageDetector

logger = logging.getLogger(__name__)


FAILURE_MESSAGES = {
    FailureKind.AUTH: "Sorry, the AI service is currently unavailable due to configuration issues. Please check your API key configuration.",
    FailureKind.MODEL_NOT_FOUND: "Sorry, there was a configuration error with the AI model. Please contact support.",
    FailureKind.RATE_LIMITED: "Sorry, the AI service is currently rate limited. Please try again in a moment.",
    FailureKind.UNKNOWN: "Sorry, I encountered an error while processing your question. Please try again later.",
}

HISTORY_ROLES = ("user", "assistant")


@dataclass(frozen=True)
class GatewayResult:
    ok: bool
    text: str
    failure: Optional[FailureKind] = None

    @classmethod
    def success(cls, text: str) -> "GatewayResult":
        return cls(ok=True, text=text)

    @classmethod
    def failed(cls, kind: FailureKind) -> "GatewayResult":
        return cls(ok=False, text=FAILURE_MESSAGES[kind], failure=kind)


def history_messages(history) -> List[Dict[str, str]]:
    """Keep well-formed user/assistant turns, in order."""
    if not history:
        return []

    messages = []
    for turn in history:
        if (isinstance(turn, dict) and turn.get("role") in HISTORY_ROLES
                and isinstance(turn.get("content"), str)):
            messages.append({"role": turn["role"], "content": turn["content"]})
        else:
            logger.debug("Dropping malformed history turn: %r", turn)
    return messages


class AnswerGateway:
    """
    Generative answer source.

    Args:
        client: Object with chat(messages, temperature=..., max_tokens=...) -> str
        settings: Sampling parameters per category
        detector: Used when the caller gives no language
    """

    def __init__(self, client, settings: Settings = None, detector: LanguageDetector = None):
        self.client = client
        self.settings = settings or Settings()
        self.detector = detector or LanguageDetector()

    def build_messages(self, question: str, language: DetectedLanguage, is_math_problem: bool = False,
                       context: Optional[str] = None, history=None,
                       system_prompt: Optional[str] = None) -> List[Dict[str, str]]:
        """
        System prompt, then prior turns, then the question.
        """
        messages = [{
            "role": "system",
            "content": build_system_prompt(language, is_math_problem, context, system_prompt),
        }]
        messages.extend(history_messages(history))
        messages.append({"role": "user", "content": question})
        return messages

    def ask(self, question: str, is_math_problem: bool = False, language: DetectedLanguage = None,
            context: Optional[str] = None, history=None, system_prompt: Optional[str] = None) -> GatewayResult:
        """
        Ask the LLM.

        Args:
            question: Question text as asked (original casing)
            is_math_problem: Use the math tutor prompt and cooler sampling
            language: Answer language; detected from the question if omitted
            context: Source material appended to the system prompt
            history: Prior {"role", "content"} turns
            system_prompt: Overrides the built-in templates

        Returns:
            GatewayResult
        """
        language = language or self.detector.detect(question)
        messages = self.build_messages(question, language, is_math_problem, context, history, system_prompt)

        if is_math_problem:
            temperature, max_tokens = self.settings.math_temperature, self.settings.math_max_tokens
        else:
            temperature, max_tokens = self.settings.general_temperature, self.settings.general_max_tokens

        try:
            text = self.client.chat(messages, temperature=temperature, max_tokens=max_tokens)
        except Exception as e:
            kind = classify_error(e)
            logger.error("AI API error (%s): %s", kind.value, e)
            return GatewayResult.failed(kind)

        if not text or not text.strip():
            logger.error("AI API returned an empty answer")
            return GatewayResult.failed(FailureKind.UNKNOWN)

        return GatewayResult.success(remove_repetitive_content(text))
