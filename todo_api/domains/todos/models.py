# todo_api/domains/todos/models.py
from typing import Optional

from pydantic import BaseModel, Field

from .types import Todo


class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)


class TodoResponse(BaseModel):
    id: str
    organization_id: str
    created_by: str
    title: str
    description: Optional[str]
    completed: bool
    created_at: str
    updated_at: str
    completed_at: Optional[str]

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoResponse":
        return cls(
            id=todo.id,
            organization_id=todo.organization_id,
            created_by=todo.created_by,
            title=todo.title,
            description=todo.description,
            completed=todo.completed,
            created_at=todo.created_at.isoformat(),
            updated_at=todo.updated_at.isoformat(),
            completed_at=todo.completed_at.isoformat() if todo.completed_at else None,
        )
