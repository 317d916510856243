# tests/conftest.py
from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from main import create_app
from persons.dependencies import get_person_repository


class InMemoryPersonRepository:
    """
    Same interface as `PersonRepository`, rows kept in a dict keyed by id.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    async def list_persons(self) -> list[dict[str, Any]]:
        return [dict(self.rows[k]) for k in sorted(self.rows)]

    async def get_person(self, person_id: int) -> dict[str, Any] | None:
        row = self.rows.get(person_id)
        return dict(row) if row is not None else None

    async def create_person(self, *, name, age, address, work) -> int:
        person_id = self._next_id
        self._next_id += 1
        self.rows[person_id] = {"id": person_id, "name": name, "age": age, "address": address, "work": work}
        return person_id

    async def update_person(self, person_id: int, *, name, age, address, work) -> None:
        if person_id in self.rows:
            self.rows[person_id].update({"name": name, "age": age, "address": address, "work": work})

    async def delete_person(self, person_id: int) -> None:
        self.rows.pop(person_id, None)


class RecordingPool:
    """
    Minimal stand-in for `asyncpg.Pool` that records statements.
    """

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows = rows or []
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.closed = False

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self.calls.append(("fetch", sql, args))
        return list(self.rows)

    async def fetchrow(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self.calls.append(("fetchrow", sql, args))
        return self.rows[0] if self.rows else None

    async def fetchval(self, sql: str, *args: Any) -> Any:
        self.calls.append(("fetchval", sql, args))
        return 1

    async def execute(self, sql: str, *args: Any) -> str:
        self.calls.append(("execute", sql, args))
        return "OK"

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def repo() -> InMemoryPersonRepository:
    return InMemoryPersonRepository()


@pytest.fixture()
def api_client(repo):
    """
    TestClient with the repository dependency replaced by `repo`.

    The client is not entered as a context manager, so the lifespan (and
    with it the real pool) never runs.
    """
    app = create_app()
    app.dependency_overrides[get_person_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
