from __future__ import annotations

from typing import Any

import pytest

from core import db


class FakeDb:
    """
    Scripted stand-in for `core.db`.

    Each call pops the next queued response; an exception instance is raised
    instead of returned. Every call is recorded as (method, sql, args).
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self._responses: list[Any] = []

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    def _next(self) -> Any:
        if not self._responses:
            return None
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self.calls.append(("fetch_one", sql, args))
        return self._next()

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self.calls.append(("fetch_all", sql, args))
        response = self._next()
        return [] if response is None else response

    async def execute(self, sql: str, *args: Any) -> None:
        self.calls.append(("execute", sql, args))
        self._next()

    @property
    def statements(self) -> list[str]:
        return [" ".join(sql.split()) for _, sql, _ in self.calls]


@pytest.fixture(autouse=True)
def auth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "test-secret-that-is-long-enough-for-hs256")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")


@pytest.fixture
def fake_db(monkeypatch: pytest.MonkeyPatch) -> FakeDb:
    fake = FakeDb()
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    monkeypatch.setattr(db, "execute", fake.execute)
    return fake
