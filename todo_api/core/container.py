# todo_api/core/container.py
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from fastapi import Request

from todo_api.domains.organizations.in_memory import (
    InMemoryMembershipStore,
    InMemoryOrganizationStore,
)
from todo_api.domains.organizations.service import OrganizationService
from todo_api.domains.organizations.stores import MembershipStore, OrganizationStore
from todo_api.domains.todos.in_memory import InMemoryTodoStore
from todo_api.domains.todos.service import TodoService
from todo_api.domains.todos.stores import TodoStore
from todo_api.shared.clock import Clock, SystemClock
from todo_api.shared.ids import IdGenerator, UuidIdGenerator

if TYPE_CHECKING:
    from prisma import Prisma


async def _noop() -> None:
    return None


@dataclass
class Container:
    """
    Stores and services shared by every request of one application instance.

    The organization service is a single instance per container so its
    per-organization locks are shared across requests.
    """

    organization_store: OrganizationStore
    membership_store: MembershipStore
    todo_store: TodoStore
    id_generator: IdGenerator
    clock: Clock
    organization_service: OrganizationService = field(init=False)
    todo_service: TodoService = field(init=False)
    on_startup: Callable[[], Awaitable[None]] = _noop
    on_shutdown: Callable[[], Awaitable[None]] = _noop

    def __post_init__(self) -> None:
        self.organization_service = OrganizationService(
            self.organization_store,
            self.membership_store,
            self.id_generator,
            self.clock,
        )
        self.todo_service = TodoService(self.todo_store, self.id_generator, self.clock)

    async def connect(self) -> None:
        await self.on_startup()

    async def disconnect(self) -> None:
        await self.on_shutdown()


def build_memory_container(
    id_generator: Optional[IdGenerator] = None, clock: Optional[Clock] = None
) -> Container:
    """Container backed by in-memory stores, used by tests and local runs."""
    return Container(
        organization_store=InMemoryOrganizationStore(),
        membership_store=InMemoryMembershipStore(),
        todo_store=InMemoryTodoStore(),
        id_generator=id_generator or UuidIdGenerator(),
        clock=clock or SystemClock(),
    )


def build_prisma_container(db: "Prisma") -> Container:
    """Container backed by the Prisma client; connects on application startup."""
    from todo_api.domains.organizations.prisma_store import (
        PrismaMembershipStore,
        PrismaOrganizationStore,
    )
    from todo_api.domains.todos.prisma_store import PrismaTodoStore

    return Container(
        organization_store=PrismaOrganizationStore(db),
        membership_store=PrismaMembershipStore(db),
        todo_store=PrismaTodoStore(db),
        id_generator=UuidIdGenerator(),
        clock=SystemClock(),
        on_startup=db.connect,
        on_shutdown=db.disconnect,
    )


def get_container(request: Request) -> Container:
    """Container dependency for FastAPI dependency injection."""
    return request.app.state.container
