# todo_api/domains/todos/routes.py
from typing import List, NoReturn

from fastapi import APIRouter, Depends, status

from todo_api.core.container import Container, get_container
from todo_api.domains.todos.models import TodoCreate, TodoResponse
from todo_api.shared import exceptions
from todo_api.shared.permissions import (
    OrgContext,
    Permission,
    authorize,
    get_org_context,
    require_creator_or_permission,
    require_permission,
)
from todo_api.shared.result import Err

from . import errors

router = APIRouter(prefix="/organizations/{org_id}/todos", tags=["Todos"])

complete_todo_policy = require_creator_or_permission(Permission.TODOS_COMPLETE)


def raise_for_error(error: object) -> NoReturn:
    """Map a todo service error to its HTTP error."""
    if isinstance(error, errors.InvalidTodoId):
        raise exceptions.InvalidTodoIdError()
    if isinstance(error, errors.TodoNotFound):
        raise exceptions.TodoNotFoundError()
    if isinstance(error, errors.TodoAlreadyCompleted):
        raise exceptions.TodoAlreadyCompletedError()
    raise exceptions.UnexpectedError()


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createTodo",
)
async def create_todo(
    org_id: str,
    todo_data: TodoCreate,
    org_context: OrgContext = Depends(require_permission(Permission.TODOS_CREATE)),
    container: Container = Depends(get_container),
) -> TodoResponse:
    result = await container.todo_service.create_todo(
        org_id, org_context.user_id, todo_data.title, todo_data.description
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
    return TodoResponse.from_domain(result.value)


@router.get("", response_model=List[TodoResponse], operation_id="listTodos")
async def list_todos(
    org_id: str,
    org_context: OrgContext = Depends(require_permission(Permission.TODOS_READ)),
    container: Container = Depends(get_container),
) -> List[TodoResponse]:
    result = await container.todo_service.list_todos(org_id)
    if isinstance(result, Err):
        raise_for_error(result.error)
    return [TodoResponse.from_domain(t) for t in result.value]


@router.get("/{todo_id}", response_model=TodoResponse, operation_id="getTodo")
async def get_todo(
    org_id: str,
    todo_id: str,
    org_context: OrgContext = Depends(require_permission(Permission.TODOS_READ)),
    container: Container = Depends(get_container),
) -> TodoResponse:
    result = await container.todo_service.get_todo_by_id(todo_id, org_id)
    if isinstance(result, Err):
        raise_for_error(result.error)
    return TodoResponse.from_domain(result.value)


@router.post(
    "/{todo_id}/complete",
    response_model=TodoResponse,
    operation_id="completeTodo",
)
async def complete_todo(
    org_id: str,
    todo_id: str,
    org_context: OrgContext = Depends(get_org_context),
    container: Container = Depends(get_container),
) -> TodoResponse:
    """
    Mark a todo as completed.

    The creator of the todo may always complete it; anyone else needs the
    ``todos:complete`` permission.
    """
    found = await container.todo_service.get_todo_by_id(todo_id, org_id)
    if isinstance(found, Err):
        raise_for_error(found.error)

    authorize(org_context, complete_todo_policy, {"created_by": found.value.created_by})

    result = await container.todo_service.complete_todo(todo_id, org_id)
    if isinstance(result, Err):
        raise_for_error(result.error)
    return TodoResponse.from_domain(result.value)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteTodo",
)
async def delete_todo(
    org_id: str,
    todo_id: str,
    org_context: OrgContext = Depends(require_permission(Permission.TODOS_DELETE)),
    container: Container = Depends(get_container),
) -> None:
    result = await container.todo_service.delete_todo(todo_id, org_id)
    if isinstance(result, Err):
        raise_for_error(result.error)
