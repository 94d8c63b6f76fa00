"""Category repository with the category-in-use delete guard."""

from __future__ import annotations

from typing import TYPE_CHECKING

from task_planner.core.errors import CategoryInUseError, NotFoundError, ValidationError
from task_planner.core.logging import get_logger
from task_planner.models.categories import DEFAULT_CATEGORY_COLOR, Category

if TYPE_CHECKING:
    from task_planner.db.store import EntityStore
    from task_planner.schemas.categories import CategoryCreate, CategoryUpdate

logger = get_logger(__name__)


def _required_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        msg = "Category name is required"
        raise ValidationError(msg)
    return cleaned


class CategoryRepository:
    """Category operations against an open `EntityStore`.

    Tasks reference categories by name. Renaming a category leaves existing
    tasks on the old name; use `reassign_tasks` to move them explicitly.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def _index_of(self, category_id: str) -> int:
        for index, category in enumerate(self.store.categories):
            if category.id == category_id:
                return index
        raise NotFoundError("Category", category_id)

    def get_all(self) -> list[Category]:
        return [category.model_copy() for category in self.store.categories]

    def get_by_id(self, category_id: str) -> Category:
        return self.store.categories[self._index_of(category_id)].model_copy()

    def create(self, payload: CategoryCreate) -> Category:
        category = Category(
            name=_required_name(payload.name),
            color=payload.color or DEFAULT_CATEGORY_COLOR,
        )
        with self.store.mutation():
            self.store.categories.append(category)
        logger.info("category.created", extra={"category_id": category.id})
        return category.model_copy()

    def update(self, category_id: str, payload: CategoryUpdate) -> Category:
        with self.store.mutation():
            index = self._index_of(category_id)
            current = self.store.categories[index]
            updated = current.model_copy(
                update={
                    "name": _required_name(payload.name),
                    "color": payload.color or current.color,
                },
            )
            self.store.categories[index] = updated
        if updated.name != current.name:
            orphaned = self.count_tasks_using(current.name)
            if orphaned:
                logger.warning(
                    "category.renamed_with_tasks",
                    extra={
                        "category_id": category_id,
                        "old_name": current.name,
                        "new_name": updated.name,
                        "orphaned_tasks": orphaned,
                    },
                )
        return updated.model_copy()

    def count_tasks_using(self, name: str) -> int:
        """Live count of tasks whose `category` equals *name*."""
        return sum(1 for task in self.store.tasks if task.category == name)

    def delete(self, category_id: str) -> None:
        """Delete a category unless any task still references its name."""
        with self.store.mutation():
            index = self._index_of(category_id)
            category = self.store.categories[index]
            in_use = self.count_tasks_using(category.name)
            if in_use:
                raise CategoryInUseError(category.name, in_use)
            del self.store.categories[index]
        logger.info("category.deleted", extra={"category_id": category_id})

    def reassign_tasks(self, category_id: str, target_name: str) -> int:
        """Move every task on this category to another existing category name."""
        target = (target_name or "").strip()
        with self.store.mutation():
            source = self.store.categories[self._index_of(category_id)]
            names = {category.name for category in self.store.categories}
            if not target or target == source.name or target not in names:
                msg = f'"{target}" is not another existing category'
                raise ValidationError(msg)
            moved = 0
            for task in self.store.tasks:
                if task.category == source.name:
                    task.category = target
                    moved += 1
        logger.info(
            "category.tasks_reassigned",
            extra={"category_id": category_id, "target": target, "moved": moved},
        )
        return moved
