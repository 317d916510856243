"""
Request dependencies for the persons routes.
"""

from __future__ import annotations

import re

import asyncpg
from fastapi import Depends, HTTPException, Path, status

from core import db

from .repository import PersonRepository

# ids come from a SERIAL (int4) column.
MAX_PERSON_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_person_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw or ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid id")
    person_id = int(raw)
    if person_id <= 0 or person_id > MAX_PERSON_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid id")
    return person_id


async def get_person_id(person_id: str = Path(...)) -> int:
    return parse_person_id(person_id)


async def get_person_repository(pool: asyncpg.Pool = Depends(db.get_pool)) -> PersonRepository:
    return PersonRepository(pool)
