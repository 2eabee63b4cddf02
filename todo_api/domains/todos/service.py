# todo_api/domains/todos/service.py
import logging
from dataclasses import replace
from typing import List, Optional

from todo_api.shared.clock import Clock
from todo_api.shared.ids import IdGenerator
from todo_api.shared.result import Err, Ok, Result

from .errors import (
    CompleteTodoError,
    DeleteTodoError,
    GetTodoError,
    InvalidTodoId,
    TodoAlreadyCompleted,
    TodoNotFound,
    UnexpectedError,
)
from .stores import TodoStore
from .types import Todo

logger = logging.getLogger(__name__)


class TodoService:
    """
    Organization-scoped todo operations.

    Authorization is the caller's job; every lookup here is still scoped to
    the organization so a todo id from another tenant reads as not found.
    """

    def __init__(self, todo_store: TodoStore, id_generator: IdGenerator, clock: Clock):
        self.todo_store = todo_store
        self.id_generator = id_generator
        self.clock = clock

    async def create_todo(
        self,
        organization_id: str,
        created_by: str,
        title: str,
        description: Optional[str] = None,
    ) -> Result[Todo, UnexpectedError]:
        now = self.clock.now()
        todo = Todo(
            id=self.id_generator.generate(),
            organization_id=organization_id,
            created_by=created_by,
            title=title,
            description=description,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        try:
            await self.todo_store.save(todo)
        except Exception as e:
            logger.error(f"Failed to create todo in org {organization_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to create todo", cause=e))

        logger.info(f"User {created_by} created todo {todo.id} in org {organization_id}")
        return Ok(todo)

    async def list_todos(
        self, organization_id: str
    ) -> Result[List[Todo], UnexpectedError]:
        try:
            todos = await self.todo_store.find_by_organization_id(organization_id)
        except Exception as e:
            logger.error(f"Failed to list todos for org {organization_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to list todos", cause=e))
        return Ok(todos)

    async def get_todo_by_id(
        self, todo_id: str, organization_id: str
    ) -> Result[Todo, GetTodoError]:
        """
        Load a todo within an organization.

        Args:
            todo_id: Todo identifier, validated against the id generator
            organization_id: Organization the todo must belong to

        Returns:
            Ok(Todo), or Err(InvalidTodoId | TodoNotFound | UnexpectedError)
        """
        if not self.id_generator.validate(todo_id):
            return Err(InvalidTodoId(todo_id=todo_id))

        try:
            todo = await self.todo_store.find_by_id(todo_id)
        except Exception as e:
            logger.error(f"Failed to load todo {todo_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to load todo", cause=e))

        if todo is None or todo.organization_id != organization_id:
            return Err(TodoNotFound(todo_id=todo_id))
        return Ok(todo)

    async def complete_todo(
        self, todo_id: str, organization_id: str
    ) -> Result[Todo, CompleteTodoError]:
        found = await self.get_todo_by_id(todo_id, organization_id)
        if isinstance(found, Err):
            return found

        todo = found.value
        if todo.completed:
            return Err(TodoAlreadyCompleted(todo_id=todo_id))

        now = self.clock.now()
        completed = replace(todo, completed=True, completed_at=now, updated_at=now)
        try:
            await self.todo_store.update(completed)
        except Exception as e:
            logger.error(f"Failed to complete todo {todo_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to complete todo", cause=e))

        logger.info(f"Completed todo {todo_id} in org {organization_id}")
        return Ok(completed)

    async def delete_todo(
        self, todo_id: str, organization_id: str
    ) -> Result[None, DeleteTodoError]:
        found = await self.get_todo_by_id(todo_id, organization_id)
        if isinstance(found, Err):
            return found

        try:
            await self.todo_store.delete(todo_id)
        except Exception as e:
            logger.error(f"Failed to delete todo {todo_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to delete todo", cause=e))

        logger.info(f"Deleted todo {todo_id} from org {organization_id}")
        return Ok(None)
