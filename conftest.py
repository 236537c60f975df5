"""Shared pytest fixtures: a provisioned logistics tree and scripted console I/O."""

from __future__ import annotations

from typing import Iterable, List

import pytest

from confinement import ScopeRegistry


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Register the ``console`` marker used by the scripted-session tests."""

    config.addinivalue_line(
        "markers",
        "console: drives the interactive console with scripted answers",
    )


class Script:
    """Feeds canned answers to ``ask`` and records everything sent to ``say``."""

    def __init__(self, answers: Iterable[str]):
        self.answers: List[str] = list(answers)
        self.prompts: List[str] = []
        self.output: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def say(self, line: str) -> None:
        self.output.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def scopes(tmp_path) -> ScopeRegistry:
    return ScopeRegistry.provision(tmp_path)


@pytest.fixture
def script():
    return Script
