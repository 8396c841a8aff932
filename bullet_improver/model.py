from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional, Union


# -------- Data models --------
class Style(str, Enum):
    IMPACTFUL = "Impactful"
    TECHNICAL = "Technical"
    METRICS_FOCUSED = "Metrics-Focused"
    CONCISE = "Concise"

    @classmethod
    def parse(cls, value: Any) -> Optional["Style"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None

    @classmethod
    def resolve(cls, value: Any) -> "Style":
        """Recognized style, or Impactful for anything else."""
        return cls.parse(value) or cls.IMPACTFUL


ACTION_VERBS = ("Led", "Optimized", "Engineered", "Delivered", "Spearheaded", "Automated")

METRIC_PHRASES = (
    "in 6 months",
    "by 30%",
    "for 1.2M users",
    "cut costs 20%",
    "reduced p99 latency 35%",
)

TECH_TERMS = (
    (re.compile(r"team", re.IGNORECASE), "cross-functional team"),
    (re.compile(r"feature", re.IGNORECASE), "microservice"),
    (re.compile(r"app", re.IGNORECASE), "distributed system"),
)

STOPWORDS = re.compile(r"\b(the|a|an|to|for|that|which)\b", re.IGNORECASE)
TRAILING_PUNCT = re.compile(r"[\s.,;:!?]+$")

IMPACT_SUFFIX = " to drive measurable outcomes"


# -------- Style transforms --------
def _to_technical(text: str, index: int) -> str:
    for pattern, replacement in TECH_TERMS:
        text = pattern.sub(replacement, text)
    return text


def _to_concise(text: str, index: int) -> str:
    text = STOPWORDS.sub("", text)
    return re.sub(r"\s{2,}", " ", text).strip()


def _to_impactful(text: str, index: int) -> str:
    return text + IMPACT_SUFFIX


def _to_metrics(text: str, index: int) -> str:
    return f"{text} — {METRIC_PHRASES[index % len(METRIC_PHRASES)]}"


STYLE_TRANSFORMS = {
    Style.TECHNICAL: _to_technical,
    Style.CONCISE: _to_concise,
    Style.IMPACTFUL: _to_impactful,
    Style.METRICS_FOCUSED: _to_metrics,
}


# -------- Renderer --------
def render_local(bullet: str, style: Union[Style, str], count: int = 3) -> List[str]:
    """
    Rewrite a bullet without a model: verb prefix plus a style tweak.

    Pure function; an unknown style gets the verb prefix only.
    """
    base = TRAILING_PUNCT.sub("", bullet).strip()
    transform = STYLE_TRANSFORMS.get(Style.parse(style))
    variations: List[str] = []
    for i in range(count):
        v = f"{ACTION_VERBS[i % len(ACTION_VERBS)]} {base}".strip()
        if transform is not None:
            v = transform(v, i)
        variations.append(v)
    return variations
