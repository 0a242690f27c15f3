"""Pytest configuration for tests."""

from typing import List, Union

import pytest

from review_advisor.config import Settings
from review_advisor.generation.client import TextGenerator
from review_advisor.generation.language import LanguageConformanceGate
from review_advisor.generation.prompts import PromptBuilder


class StubGenerator(TextGenerator):
    """Returns queued replies (or raises queued exceptions) and records prompts."""

    def __init__(self, *replies: Union[str, Exception]):
        self.replies: List[Union[str, Exception]] = list(replies)
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise AssertionError(f"Unexpected generation call: {prompt[:40]!r}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture(scope="session")
def prompts():
    return PromptBuilder()


@pytest.fixture
def stub_generator():
    return StubGenerator


@pytest.fixture
def make_gate(prompts):
    def _make(generator, threshold=0.3):
        return LanguageConformanceGate(generator, prompts, threshold=threshold)

    return _make
