from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class InvalidTodoId:
    code: ClassVar[str] = "INVALID_TODO_ID"
    todo_id: str


@dataclass(frozen=True)
class TodoNotFound:
    code: ClassVar[str] = "TODO_NOT_FOUND"
    todo_id: str


@dataclass(frozen=True)
class TodoAlreadyCompleted:
    code: ClassVar[str] = "TODO_ALREADY_COMPLETED"
    todo_id: str


@dataclass(frozen=True)
class UnexpectedError:
    code: ClassVar[str] = "UNEXPECTED_ERROR"
    message: str
    cause: Optional[BaseException] = None


GetTodoError = Union[InvalidTodoId, TodoNotFound, UnexpectedError]
CompleteTodoError = Union[
    InvalidTodoId, TodoNotFound, TodoAlreadyCompleted, UnexpectedError
]
DeleteTodoError = GetTodoError
