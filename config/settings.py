"""
Settings
Environment-backed configuration for the answer resolution pipeline.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


DEFAULT_MODEL = "llama-3.1-8b-instant"


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Sampling parameters are split by question category: math answers run
    cooler and shorter than general tutoring answers.
    """
    groq_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    request_timeout: float = 60.0
    data_dir: Path = Path("data")
    cache_dir: Path = Path(tempfile.gettempdir()) / "findmentor_data"
    log_level: str = "INFO"

    math_temperature: float = 0.1
    math_max_tokens: int = 1500
    general_temperature: float = 0.3
    general_max_tokens: int = 2000

    @property
    def learned_qa_file(self) -> Path:
        return self.cache_dir / "learned_qa.json"

    @property
    def video_cache_file(self) -> Path:
        return self.cache_dir / "cache_youtube.json"


def load_settings() -> Settings:
    """
    Build settings from environment variables (after loading .env).

    Returns:
        Settings instance
    """
    timeout = os.getenv("GROQ_TIMEOUT_SECONDS", "60")
    try:
        request_timeout = float(timeout)
    except ValueError:
        raise ValueError(f"GROQ_TIMEOUT_SECONDS must be a number, got '{timeout}'")

    cache_dir = os.getenv("MENTOR_CACHE_DIR")

    return Settings(
        groq_api_key=os.getenv("GROQ_API_KEY"),
        model=os.getenv("GROQ_MODEL", DEFAULT_MODEL),
        request_timeout=request_timeout,
        data_dir=Path(os.getenv("MENTOR_DATA_DIR", "data")),
        cache_dir=Path(cache_dir) if cache_dir else Settings.cache_dir,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
