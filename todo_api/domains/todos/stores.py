from typing import List, Optional, Protocol

from .types import Todo


class TodoStore(Protocol):
    async def save(self, todo: Todo) -> None: ...

    async def find_by_id(self, todo_id: str) -> Optional[Todo]: ...

    async def find_by_organization_id(self, organization_id: str) -> List[Todo]: ...

    async def update(self, todo: Todo) -> None: ...

    async def delete(self, todo_id: str) -> None: ...
