from typing import Dict, List, Optional, Set, Tuple

from .stores import DuplicateKeyError
from .types import Membership, Organization


class InMemoryOrganizationStore:
    """Dict-backed organization store with a unique slug index."""

    def __init__(self) -> None:
        self._organizations: Dict[str, Organization] = {}
        self._slug_index: Dict[str, str] = {}

    async def save(self, organization: Organization) -> None:
        owner_id = self._slug_index.get(organization.slug)
        if owner_id is not None and owner_id != organization.id:
            raise DuplicateKeyError("slug", organization.slug)

        self._organizations[organization.id] = organization
        self._slug_index[organization.slug] = organization.id

    async def find_by_id(self, organization_id: str) -> Optional[Organization]:
        return self._organizations.get(organization_id)

    async def find_by_slug(self, slug: str) -> Optional[Organization]:
        organization_id = self._slug_index.get(slug)
        if organization_id is None:
            return None
        return self._organizations.get(organization_id)

    async def update(self, organization: Organization) -> None:
        existing = self._organizations.get(organization.id)
        if existing is None:
            return

        if existing.slug != organization.slug:
            owner_id = self._slug_index.get(organization.slug)
            if owner_id is not None and owner_id != organization.id:
                raise DuplicateKeyError("slug", organization.slug)
            del self._slug_index[existing.slug]
            self._slug_index[organization.slug] = organization.id

        self._organizations[organization.id] = organization

    async def delete(self, organization_id: str) -> None:
        organization = self._organizations.pop(organization_id, None)
        if organization is None:
            return

        if self._slug_index.get(organization.slug) == organization_id:
            del self._slug_index[organization.slug]


class InMemoryMembershipStore:
    """
    Dict-backed membership store.

    Maintains a unique ``(user_id, organization_id)`` index plus per-org and
    per-user indexes so every lookup the resolver and service need is a
    direct dictionary access.
    """

    def __init__(self) -> None:
        self._memberships: Dict[str, Membership] = {}
        self._user_org_index: Dict[Tuple[str, str], str] = {}
        self._org_index: Dict[str, Set[str]] = {}
        self._user_index: Dict[str, Set[str]] = {}

    async def save(self, membership: Membership) -> None:
        key = (membership.user_id, membership.organization_id)
        existing_id = self._user_org_index.get(key)
        if existing_id is not None and existing_id != membership.id:
            raise DuplicateKeyError(
                "user_id, organization_id",
                f"{membership.user_id}, {membership.organization_id}",
            )

        self._memberships[membership.id] = membership
        self._user_org_index[key] = membership.id
        self._org_index.setdefault(membership.organization_id, set()).add(
            membership.id
        )
        self._user_index.setdefault(membership.user_id, set()).add(membership.id)

    async def find_by_id(self, membership_id: str) -> Optional[Membership]:
        return self._memberships.get(membership_id)

    async def find_by_user_and_org(
        self, user_id: str, organization_id: str
    ) -> Optional[Membership]:
        membership_id = self._user_org_index.get((user_id, organization_id))
        if membership_id is None:
            return None
        return self._memberships.get(membership_id)

    async def find_by_organization_id(self, organization_id: str) -> List[Membership]:
        return self._collect(self._org_index.get(organization_id, set()))

    async def find_by_user_id(self, user_id: str) -> List[Membership]:
        return self._collect(self._user_index.get(user_id, set()))

    async def update(self, membership: Membership) -> None:
        if membership.id in self._memberships:
            self._memberships[membership.id] = membership

    async def delete(self, membership_id: str) -> None:
        membership = self._memberships.pop(membership_id, None)
        if membership is None:
            return

        self._user_org_index.pop((membership.user_id, membership.organization_id), None)
        self._org_index.get(membership.organization_id, set()).discard(membership_id)
        self._user_index.get(membership.user_id, set()).discard(membership_id)

    def _collect(self, membership_ids: Set[str]) -> List[Membership]:
        memberships = [
            self._memberships[membership_id]
            for membership_id in membership_ids
            if membership_id in self._memberships
        ]
        return sorted(memberships, key=lambda m: (m.created_at, m.id))
