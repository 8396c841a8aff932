from __future__ import annotations

import re
import logging
from typing import Any, List, Optional, Union

from .config import Settings
from .model import Style, render_local
from .prompt_templates import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger("uvicorn.error")

DEFAULT_MODEL = "gpt-4o-mini"
# Placeholder some deployments ship in OPENAI_MODEL; never sent upstream.
RESERVED_MODEL = "gpt-5"
DEFAULT_TEMPERATURE = 0.7
RESULT_COUNT = 3

LIST_MARKER = re.compile(r"^[-*•\d.()\s]+")


def normalize_lines(text: Optional[str]) -> List[str]:
    """Split model output into lines with list markers removed; blanks dropped."""
    lines: List[str] = []
    for raw in re.split(r"\r?\n", text or ""):
        line = LIST_MARKER.sub("", raw.strip()).strip()
        if line:
            lines.append(line)
    return lines


class BulletImprover:
    """
    Produce exactly three rewrites of a resume bullet.

    - With an API key and a client → OpenAI chat completion, padded from
      the local generator when the model returns fewer than 3 lines.
    - Otherwise → local generator only.

    Errors from the completion call are not caught here.
    """

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self.client = client

    @property
    def mode(self) -> str:
        return "llm" if self.settings.openai_api_key and self.client is not None else "local"

    @property
    def model(self) -> str:
        configured = self.settings.openai_model
        if not configured or configured == RESERVED_MODEL:
            return DEFAULT_MODEL
        return configured

    @property
    def temperature(self) -> float:
        if self.settings.openai_temperature is None:
            return DEFAULT_TEMPERATURE
        return self.settings.openai_temperature

    async def generate(self, bullet: str, style: Union[Style, str]) -> List[str]:
        if self.mode == "local":
            logger.warning("No completion client configured; using local fallback")
            return render_local(bullet, style, RESULT_COUNT)

        resp = await self.client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(bullet, style)},
            ],
        )
        choices = getattr(resp, "choices", None) or []
        content = choices[0].message.content if choices else None

        lines = normalize_lines(content)
        if len(lines) < RESULT_COUNT:
            logger.info("Model returned %d usable line(s); padding from local fallback", len(lines))
            lines = (lines + render_local(bullet, style, RESULT_COUNT))[:RESULT_COUNT]
        return lines[:RESULT_COUNT]
