"""
Persistence ports for the organization domain.

Infrastructure implements these (in-memory for tests and local runs, Prisma
for the database). Stores enforce the uniqueness invariants at the data layer:
organization slug, and one membership per ``(user_id, organization_id)``.
"""

from typing import List, Optional, Protocol

from .types import Membership, Organization


class DuplicateKeyError(Exception):
    """Raised by a store when a write violates a unique index."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"Duplicate value for {key}: {value}")
        self.key = key
        self.value = value


class OrganizationStore(Protocol):
    async def save(self, organization: Organization) -> None: ...

    async def find_by_id(self, organization_id: str) -> Optional[Organization]: ...

    async def find_by_slug(self, slug: str) -> Optional[Organization]: ...

    async def update(self, organization: Organization) -> None: ...

    async def delete(self, organization_id: str) -> None: ...


class MembershipStore(Protocol):
    async def save(self, membership: Membership) -> None: ...

    async def find_by_id(self, membership_id: str) -> Optional[Membership]: ...

    async def find_by_user_and_org(
        self, user_id: str, organization_id: str
    ) -> Optional[Membership]: ...

    async def find_by_organization_id(
        self, organization_id: str
    ) -> List[Membership]: ...

    async def find_by_user_id(self, user_id: str) -> List[Membership]: ...

    async def update(self, membership: Membership) -> None: ...

    async def delete(self, membership_id: str) -> None: ...
