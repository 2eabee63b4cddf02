from typing import Protocol
from uuid import UUID, uuid4


class IdGenerator(Protocol):
    def generate(self) -> str: ...

    def validate(self, value: str) -> bool: ...


class UuidIdGenerator:
    """UUID4 identifiers, as stored by the database."""

    def generate(self) -> str:
        return str(uuid4())

    def validate(self, value: str) -> bool:
        try:
            UUID(value)
        except (ValueError, TypeError, AttributeError):
            return False
        return True


class SequentialIdGenerator:
    """Predictable ids (``test-id-1``, ``test-id-2``, ...) for tests."""

    def __init__(self, prefix: str = "test-id") -> None:
        self.prefix = prefix
        self._counter = 0

    def generate(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"

    def validate(self, value: str) -> bool:
        return value.startswith(f"{self.prefix}-")
