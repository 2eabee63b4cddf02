# todo_api/domains/todos/prisma_store.py
from typing import TYPE_CHECKING, Any, List, Optional

from .types import Todo

if TYPE_CHECKING:
    from prisma import Prisma


def _to_todo(record: Any) -> Todo:
    return Todo(
        id=record.id,
        organization_id=record.organizationId,
        created_by=record.createdBy,
        title=record.title,
        description=record.description,
        completed=record.completed,
        created_at=record.createdAt,
        updated_at=record.updatedAt,
        completed_at=record.completedAt,
    )


class PrismaTodoStore:
    """Todo store backed by the ``Todo`` Prisma model."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def save(self, todo: Todo) -> None:
        await self.db.todo.create(
            data={
                "id": todo.id,
                "organizationId": todo.organization_id,
                "createdBy": todo.created_by,
                "title": todo.title,
                "description": todo.description,
                "completed": todo.completed,
                "createdAt": todo.created_at,
                "updatedAt": todo.updated_at,
                "completedAt": todo.completed_at,
            }
        )

    async def find_by_id(self, todo_id: str) -> Optional[Todo]:
        record = await self.db.todo.find_unique(where={"id": todo_id})
        return _to_todo(record) if record else None

    async def find_by_organization_id(self, organization_id: str) -> List[Todo]:
        records = await self.db.todo.find_many(
            where={"organizationId": organization_id},
            order={"createdAt": "desc"},
        )
        return [_to_todo(record) for record in records]

    async def update(self, todo: Todo) -> None:
        await self.db.todo.update(
            where={"id": todo.id},
            data={
                "title": todo.title,
                "description": todo.description,
                "completed": todo.completed,
                "updatedAt": todo.updated_at,
                "completedAt": todo.completed_at,
            },
        )

    async def delete(self, todo_id: str) -> None:
        await self.db.todo.delete_many(where={"id": todo_id})
