"""
Global pytest configuration and fixtures for the Todo API test suite.
"""

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from todo_api.app import create_app
from todo_api.core.container import Container, build_memory_container
from todo_api.domains.organizations.in_memory import (
    InMemoryMembershipStore,
    InMemoryOrganizationStore,
)
from todo_api.domains.organizations.service import OrganizationService
from todo_api.shared.clock import IncrementingClock
from todo_api.shared.ids import SequentialIdGenerator

# Import fixtures from fixture modules
from tests.fixtures.auth_fixtures import *  # noqa: F403, F401
from tests.fixtures.organization_fixtures import *  # noqa: F403, F401


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    """Predictable ids: test-id-1, test-id-2, ..."""
    return SequentialIdGenerator()


@pytest.fixture
def clock() -> IncrementingClock:
    """Clock that advances one second per call."""
    return IncrementingClock()


@pytest.fixture
def organization_store() -> InMemoryOrganizationStore:
    return InMemoryOrganizationStore()


@pytest.fixture
def membership_store() -> InMemoryMembershipStore:
    return InMemoryMembershipStore()


@pytest.fixture
def organization_service(
    organization_store: InMemoryOrganizationStore,
    membership_store: InMemoryMembershipStore,
    id_generator: SequentialIdGenerator,
    clock: IncrementingClock,
) -> OrganizationService:
    """Organization service over fresh in-memory stores."""
    return OrganizationService(organization_store, membership_store, id_generator, clock)


@pytest.fixture
def container(
    id_generator: SequentialIdGenerator, clock: IncrementingClock
) -> Container:
    """In-memory application container."""
    return build_memory_container(id_generator=id_generator, clock=clock)


@pytest.fixture
def client(container: Container) -> Generator[TestClient, None, None]:
    """FastAPI test client over an in-memory container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers_for(
    make_token: Callable[[str], str],
) -> Callable[[str], Dict[str, str]]:
    """Build Authorization headers carrying a valid token for a user."""

    def _headers(user_id: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}

    return _headers
