"""Category CRUD and task reassignment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from task_planner.api.deps import get_category_repository
from task_planner.schemas.categories import (
    CategoryCreate,
    CategoryRead,
    CategoryReassign,
    CategoryReassignResult,
    CategoryUpdate,
)
from task_planner.schemas.errors import CategoryInUseResponse, ErrorResponse
from task_planner.services.categories import CategoryRepository

router = APIRouter(prefix="/categories", tags=["categories"])
CATEGORIES_DEP = Depends(get_category_repository)
NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_REQUEST_RESPONSE = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


@router.get("", response_model=list[CategoryRead])
async def list_categories(repo: CategoryRepository = CATEGORIES_DEP) -> list[CategoryRead]:
    """List categories in store order."""
    return [CategoryRead.model_validate(c, from_attributes=True) for c in repo.get_all()]


@router.get("/{category_id}", response_model=CategoryRead, responses=NOT_FOUND_RESPONSE)
async def get_category(
    category_id: str,
    repo: CategoryRepository = CATEGORIES_DEP,
) -> CategoryRead:
    """Get a category by id."""
    return CategoryRead.model_validate(repo.get_by_id(category_id), from_attributes=True)


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST_RESPONSE,
)
async def create_category(
    payload: CategoryCreate,
    repo: CategoryRepository = CATEGORIES_DEP,
) -> CategoryRead:
    """Create a category; `color` defaults to neutral gray."""
    return CategoryRead.model_validate(repo.create(payload), from_attributes=True)


@router.put(
    "/{category_id}",
    response_model=CategoryRead,
    responses={**NOT_FOUND_RESPONSE, **BAD_REQUEST_RESPONSE},
)
async def update_category(
    category_id: str,
    payload: CategoryUpdate,
    repo: CategoryRepository = CATEGORIES_DEP,
) -> CategoryRead:
    """Rename or recolor a category.

    Tasks are linked by name, so a rename leaves existing tasks on the old name.
    """
    return CategoryRead.model_validate(
        repo.update(category_id, payload),
        from_attributes=True,
    )


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **NOT_FOUND_RESPONSE,
        status.HTTP_400_BAD_REQUEST: {"model": CategoryInUseResponse},
    },
)
async def delete_category(
    category_id: str,
    repo: CategoryRepository = CATEGORIES_DEP,
) -> Response:
    """Delete a category that no task references."""
    repo.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{category_id}/reassign",
    response_model=CategoryReassignResult,
    responses={**NOT_FOUND_RESPONSE, **BAD_REQUEST_RESPONSE},
)
async def reassign_category_tasks(
    category_id: str,
    payload: CategoryReassign,
    repo: CategoryRepository = CATEGORIES_DEP,
) -> CategoryReassignResult:
    """Move every task on this category to another existing category."""
    return CategoryReassignResult(moved=repo.reassign_tasks(category_id, payload.target))
