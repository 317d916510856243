"""
Persons persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS persons (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    age INTEGER,
    address TEXT,
    work TEXT
)
"""


async def ensure_schema(pool: asyncpg.Pool) -> None:
    await db.execute(pool, SCHEMA_SQL)


class PersonRepository:
    """
    One SQL statement per method, each on a pooled connection.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def list_persons(self) -> list[dict[str, Any]]:
        return await db.fetch_all(
            self._pool,
            """
            SELECT id, name, age, address, work
            FROM persons
            ORDER BY id ASC
            """,
        )

    async def get_person(self, person_id: int) -> dict[str, Any] | None:
        return await db.fetch_one(
            self._pool,
            """
            SELECT id, name, age, address, work
            FROM persons
            WHERE id = $1
            """,
            person_id,
        )

    async def create_person(
        self,
        *,
        name: str,
        age: int | None,
        address: str | None,
        work: str | None,
    ) -> int:
        row = await db.fetch_one(
            self._pool,
            """
            INSERT INTO persons (name, age, address, work)
            VALUES ($1, $2, $3, $4)
            RETURNING id
            """,
            name,
            age,
            address,
            work,
        )
        if row is None:
            raise RuntimeError("Failed to insert person.")
        return int(row["id"])

    async def update_person(
        self,
        person_id: int,
        *,
        name: str,
        age: int | None,
        address: str | None,
        work: str | None,
    ) -> None:
        await db.execute(
            self._pool,
            """
            UPDATE persons
            SET name = $1,
                age = $2,
                address = $3,
                work = $4
            WHERE id = $5
            """,
            name,
            age,
            address,
            work,
            person_id,
        )

    async def delete_person(self, person_id: int) -> None:
        await db.execute(
            self._pool,
            """
            DELETE FROM persons
            WHERE id = $1
            """,
            person_id,
        )
