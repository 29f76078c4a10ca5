"""Shared fixtures for tasklist tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from tasklist.models import Task

BASE_TIME = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(
        self,
        interval: float,
        function: Callable[..., Any],
        args: tuple[Any, ...] | None = None,
        kwargs: dict[str, Any] | None = None,
    ) -> None:
        self.interval = interval
        self.function = function
        self.args = tuple(args or ())
        self.kwargs = dict(kwargs or {})
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def is_alive(self) -> bool:
        return self.started and not self.cancelled and not self.fired

    def fire(self) -> None:
        """Run the callback as if the interval had elapsed."""
        self.fired = True
        self.function(*self.args, **self.kwargs)


class FakeTimerFactory:
    """Records every timer it creates."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[..., Any], **kwargs: Any) -> FakeTimer:
        timer = FakeTimer(interval, function, **kwargs)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def fake_timers() -> FakeTimerFactory:
    """Timer factory whose timers fire only on demand."""
    return FakeTimerFactory()


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Build tasks with predictable ids and creation times."""
    counter = {"n": 0}

    def _make(title: str, **overrides: Any) -> Task:
        counter["n"] += 1
        n = counter["n"]
        fields: dict[str, Any] = {
            "id": f"task{n:05d}",
            "title": title,
            "created_at": BASE_TIME + timedelta(minutes=n),
        }
        fields.update(overrides)
        return Task(**fields)

    return _make


@pytest.fixture
def sample_tasks_data() -> list[dict[str, Any]]:
    """Task records in the stored camelCase layout."""
    return [
        {
            "id": "k3j9x0a1b",
            "title": "Buy milk",
            "completed": False,
            "priority": "low",
            "createdAt": "2026-10-18T08:30:00.000Z",
        },
        {
            "id": "p0q8r7s6t",
            "title": "Call Bob",
            "completed": True,
            "priority": "high",
            "createdAt": "2026-10-18T09:45:12.345Z",
        },
    ]
