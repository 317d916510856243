"""
Persons business logic.

Merge policy for partial updates (`merge_patch`):
- `age` overwrites whenever it is present and not null, so `0` is applied.
- `name`, `address` and `work` overwrite only when non-empty; an empty
  string means "no change". This is looser than the age rule and is kept
  as-is for compatibility with existing clients.

Patch is read-then-write without a transaction: concurrent patches on the
same id race and the last write wins.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import schemas
from .repository import PersonRepository

logger = logging.getLogger(__name__)

NOT_FOUND = "not found"


def merge_patch(current: schemas.Person, patch: schemas.PersonPatch) -> schemas.Person:
    updates: dict[str, object] = {}
    if patch.name:
        updates["name"] = patch.name
    if patch.age is not None:
        updates["age"] = patch.age
    if patch.address:
        updates["address"] = patch.address
    if patch.work:
        updates["work"] = patch.work
    return current.model_copy(update=updates)


async def list_persons(repo: PersonRepository) -> list[schemas.Person]:
    rows = await repo.list_persons()
    return [schemas.Person.model_validate(row) for row in rows]


async def get_person(repo: PersonRepository, person_id: int) -> schemas.Person:
    row = await repo.get_person(person_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return schemas.Person.model_validate(row)


async def create_person(repo: PersonRepository, payload: schemas.PersonIn) -> int:
    person_id = await repo.create_person(
        name=payload.name,
        age=payload.age,
        address=payload.address or None,
        work=payload.work or None,
    )
    logger.info("person_created id=%s", person_id)
    return person_id


async def patch_person(
    repo: PersonRepository,
    person_id: int,
    patch: schemas.PersonPatch,
) -> schemas.Person:
    current = await get_person(repo, person_id)
    merged = merge_patch(current, patch)
    await repo.update_person(
        person_id,
        name=merged.name,
        age=merged.age,
        address=merged.address,
        work=merged.work,
    )
    logger.info("person_patched id=%s fields=%s", person_id, sorted(patch.model_fields_set))
    return merged


async def delete_person(repo: PersonRepository, person_id: int) -> None:
    # Deleting a missing id is not an error.
    await repo.delete_person(person_id)
    logger.info("person_deleted id=%s", person_id)
