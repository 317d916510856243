"""
Persons API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from . import schemas, service
from .dependencies import get_person_id, get_person_repository
from .repository import PersonRepository

BASE_PATH = "/api/v1/persons"

router = APIRouter(prefix=BASE_PATH)


def person_location(person_id: int) -> str:
    return f"{BASE_PATH}/{person_id}"


@router.get("", response_model=list[schemas.Person], response_model_exclude_none=True)
@router.get("/", response_model=list[schemas.Person], response_model_exclude_none=True, include_in_schema=False)
async def list_persons(
    repo: PersonRepository = Depends(get_person_repository),
) -> list[schemas.Person]:
    return await service.list_persons(repo)


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
@router.post("/", status_code=status.HTTP_201_CREATED, response_class=Response, include_in_schema=False)
async def create_person(
    payload: schemas.PersonIn,
    repo: PersonRepository = Depends(get_person_repository),
) -> Response:
    """
    Create a person. The response has no body; `Location` points at it.
    """
    person_id = await service.create_person(repo, payload)
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": person_location(person_id)},
    )


@router.get("/{person_id}", response_model=schemas.Person, response_model_exclude_none=True)
async def get_person(
    person_id: int = Depends(get_person_id),
    repo: PersonRepository = Depends(get_person_repository),
) -> schemas.Person:
    return await service.get_person(repo, person_id)


@router.patch("/{person_id}", response_model=schemas.Person, response_model_exclude_none=True)
async def patch_person(
    patch: schemas.PersonPatch,
    person_id: int = Depends(get_person_id),
    repo: PersonRepository = Depends(get_person_repository),
) -> schemas.Person:
    """
    Partial update; returns the merged record.
    """
    return await service.patch_person(repo, person_id, patch)


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_person(
    person_id: int = Depends(get_person_id),
    repo: PersonRepository = Depends(get_person_repository),
) -> Response:
    await service.delete_person(repo, person_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
