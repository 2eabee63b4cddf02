"""
Discriminated result type for domain operations.

Domain services return ``Ok(value)`` or ``Err(error)`` instead of raising, so
every caller has to branch on the outcome. Only genuinely unexpected faults
are caught at the service boundary and wrapped into an error variant.

Usage:
    result = await service.create_organization(...)
    if isinstance(result, Err):
        return handle(result.error)
    organization = result.value
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error!r}")


Result = Union[Ok[T], Err[E]]
