"""Shared pytest fixtures for spitfire-posts tests."""

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from spitfire_posts import InMemoryPostStore, Post, Settings, create_app

API_KEY = "ELITE"


class RecordingStore(InMemoryPostStore):
    """In-memory store that records every operation it receives.

    Set ``fail_with`` to make every operation raise that exception
    after being recorded.
    """

    def __init__(self, posts: list[Post] | None = None) -> None:
        super().__init__(posts)
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_with: Exception | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def find_all(self) -> list[Post]:
        self._record("find_all")
        return await super().find_all()

    async def create(self, title: str, published: bool, description: str) -> Post:
        self._record("create", title, published, description)
        return await super().create(title, published, description)

    async def find_by_id_and_update(
        self, post_id: str, title: str, published: bool, description: str
    ) -> Post:
        self._record("find_by_id_and_update", post_id, title, published, description)
        return await super().find_by_id_and_update(post_id, title, published, description)

    async def find_by_id_and_delete(self, post_id: str) -> Post:
        self._record("find_by_id_and_delete", post_id)
        return await super().find_by_id_and_delete(post_id)


@pytest.fixture
def settings() -> Settings:
    """Settings accepting the reference key."""
    return Settings(api_keys=frozenset({API_KEY}))


@pytest.fixture
def store() -> RecordingStore:
    """An empty recording store."""
    return RecordingStore()


@pytest.fixture
def app(settings: Settings, store: RecordingStore) -> FastAPI:
    """The full application wired to the recording store."""
    return create_app(settings, store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """A test client that does not re-raise server errors."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying a valid API key."""
    return {"SPITFIRE-API-KEY": API_KEY}
