from typing import Dict, List, Optional

from .types import Todo


class InMemoryTodoStore:
    """Dict-backed todo store, newest first per organization."""

    def __init__(self) -> None:
        self._todos: Dict[str, Todo] = {}

    async def save(self, todo: Todo) -> None:
        self._todos[todo.id] = todo

    async def find_by_id(self, todo_id: str) -> Optional[Todo]:
        return self._todos.get(todo_id)

    async def find_by_organization_id(self, organization_id: str) -> List[Todo]:
        todos = [
            t for t in self._todos.values() if t.organization_id == organization_id
        ]
        return sorted(todos, key=lambda t: (t.created_at, t.id), reverse=True)

    async def update(self, todo: Todo) -> None:
        if todo.id in self._todos:
            self._todos[todo.id] = todo

    async def delete(self, todo_id: str) -> None:
        self._todos.pop(todo_id, None)
