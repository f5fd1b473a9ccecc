"""
Central Groq LLM Client
Thin wrapper over the Groq chat API plus classification of its failures.
"""

import logging
import os
from enum import Enum
from typing import Dict, List, Optional

import groq
from groq import Groq
from dotenv import load_dotenv

from config.settings import DEFAULT_MODEL

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    AUTH = "auth"
    MODEL_NOT_FOUND = "model_not_found"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


class GroqClient:
    """
    Chat-completion client using the Groq API.

    Anything with a compatible chat(messages, temperature=..., max_tokens=...)
    method can stand in for this class (the gateway only relies on that).
    """

    def __init__(self, api_key: str = None, model: str = DEFAULT_MODEL, timeout: float = None):
        """
        Initialize Groq client.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY)
            model: Default model to use (can be overridden per call)
            timeout: Request timeout in seconds, enforced by the SDK
        """
        api_key = api_key or os.getenv("GROQ_API_KEY")
        if not api_key:
            raise ValueError("GROQ_API_KEY not found in environment variables")

        options = {"max_retries": 0}
        if timeout is not None:
            options["timeout"] = timeout

        self.client = Groq(api_key=api_key, **options)
        self.default_model = model

    def chat(self, messages: List[Dict[str, str]], model: str = None,
             temperature: float = 0.3, max_tokens: int = 2000) -> str:
        """
        Run one chat completion.

        Args:
            messages: Role-tagged messages (system/user/assistant), in order
            model: Model to use (defaults to instance default)
            temperature: Sampling temperature (0.0-2.0)
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text

        Raises:
            groq.APIError subclasses on failure (no retries)
        """
        response = self.client.chat.completions.create(
            model=model or self.default_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""


def _error_code(error: Exception) -> Optional[str]:
    code = getattr(error, "code", None)
    if code:
        return code

    body = getattr(error, "body", None)
    if isinstance(body, dict):
        nested = body.get("error", body)
        if isinstance(nested, dict):
            return nested.get("code")
    return None


def classify_error(error: Exception) -> FailureKind:
    """
    Map an LLM call failure to a FailureKind.

    Looks at the SDK exception type first, then HTTP status and error code,
    so wrapped or foreign exceptions still classify.
    """
    status = getattr(error, "status_code", None) or getattr(error, "status", None)
    code = _error_code(error)
    message = str(error)

    if (isinstance(error, groq.AuthenticationError) or status == 401
            or code == "invalid_api_key" or "Invalid API Key" in message):
        return FailureKind.AUTH

    if code == "model_not_found" or isinstance(error, groq.NotFoundError):
        return FailureKind.MODEL_NOT_FOUND

    if isinstance(error, groq.RateLimitError) or status == 429:
        return FailureKind.RATE_LIMITED

    return FailureKind.UNKNOWN
