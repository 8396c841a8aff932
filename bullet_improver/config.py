from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger("uvicorn.error")

DEFAULT_MAX_BODY_BYTES = 1 * 1024 * 1024


def _parse_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return None


def _parse_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


def _parse_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


@dataclass
class Settings:
    """Process-wide configuration, read once at startup."""

    openai_api_key: Optional[str] = None
    openai_model: Optional[str] = None
    openai_temperature: Optional[float] = None
    openai_base_url: Optional[str] = None
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    static_dir: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL") or None,
            openai_temperature=_parse_float("OPENAI_TEMPERATURE"),
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS")),
            max_body_bytes=_parse_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
            static_dir=os.getenv("STATIC_DIR") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=_parse_int("PORT", 3000),
        )


def build_client(settings: Settings) -> Optional[Any]:
    """
    Build the async OpenAI client.

    Returns None when no API key is configured or the client cannot be
    constructed; callers then stay on the local generator.
    """
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; using local fallback")
        return None
    try:
        from openai import AsyncOpenAI  # type: ignore

        kwargs = {"api_key": settings.openai_api_key}
        if settings.openai_base_url:
            kwargs["base_url"] = settings.openai_base_url
        return AsyncOpenAI(**kwargs)
    except Exception:
        logger.exception("openai client unavailable; using local fallback")
        return None
