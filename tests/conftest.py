from types import SimpleNamespace

import pytest

from bullet_improver.config import Settings
from bullet_improver.generator import BulletImprover


class FakeCompletions:
    """Stands in for ``AsyncOpenAI().chat.completions``."""

    def __init__(self, content=None, error=None, choices=True):
        self.content = content
        self.error = error
        self.choices = choices
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error=None, choices=True):
        self.completions = FakeCompletions(content=content, error=error, choices=choices)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def llm_settings() -> Settings:
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def make_improver(llm_settings):
    def _make(content=None, error=None, choices=True, settings=None):
        client = FakeOpenAI(content=content, error=error, choices=choices)
        return BulletImprover(settings or llm_settings, client), client.completions

    return _make


@pytest.fixture
def local_improver() -> BulletImprover:
    return BulletImprover(Settings(), None)
