"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from yokozuna.config.settings import Settings
from yokozuna.models.descriptor import RequestDescriptor
from yokozuna.models.response import ResponseMeta


class RecordingExecutor:
    """Executor test double: records descriptors, performs no I/O."""

    def __init__(self) -> None:
        self.descriptors: list[RequestDescriptor] = []

    def execute(self, descriptor: RequestDescriptor) -> None:
        self.descriptors.append(descriptor)

    @property
    def last(self) -> RequestDescriptor:
        return self.descriptors[-1]

    def respond(self, error: Any = None, body: Any = None, meta: Any = None) -> None:
        """Complete the most recent request as a transport would."""
        assert self.last.callback is not None
        self.last.callback(error, body, meta)


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def recorder() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def callback() -> MagicMock:
    return MagicMock(name="callback")


@pytest.fixture
def meta() -> ResponseMeta:
    return ResponseMeta(method="GET", url="http://127.0.0.1:8098/search/query/books", status_code=200)


@pytest.fixture
def sample_search_body() -> bytes:
    """Raw /search/query response with facet, stats and grouping sections."""
    return (
        b'{"responseHeader":{"status":0,"QTime":2},'
        b'"response":{"numFound":1,"start":0,"docs":[{"_yz_rk":"dune","title_s":"Dune"}]},'
        b'"facet_counts":{"facet_fields":{"genre_s":["scifi",1]}},'
        b'"stats":{"stats_fields":{"pages_i":{"min":412,"max":412}}},'
        b'"grouped":null}'
    )
