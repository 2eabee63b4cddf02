# todo_api/domains/organizations/prisma_store.py
from typing import TYPE_CHECKING, Any, List, Optional

from prisma.errors import UniqueViolationError

from .stores import DuplicateKeyError
from .types import Membership, Organization, OrganizationRole

if TYPE_CHECKING:
    from prisma import Prisma


def _to_organization(record: Any) -> Organization:
    return Organization(
        id=record.id,
        name=record.name,
        slug=record.slug,
        created_at=record.createdAt,
        updated_at=record.updatedAt,
    )


def _to_membership(record: Any) -> Membership:
    return Membership(
        id=record.id,
        user_id=record.userId,
        organization_id=record.organizationId,
        role=OrganizationRole(record.role),
        created_at=record.createdAt,
        updated_at=record.updatedAt,
    )


class PrismaOrganizationStore:
    """Organization store backed by the ``Organization`` Prisma model."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def save(self, organization: Organization) -> None:
        try:
            await self.db.organization.create(
                data={
                    "id": organization.id,
                    "name": organization.name,
                    "slug": organization.slug,
                    "createdAt": organization.created_at,
                    "updatedAt": organization.updated_at,
                }
            )
        except UniqueViolationError as e:
            raise DuplicateKeyError("slug", organization.slug) from e

    async def find_by_id(self, organization_id: str) -> Optional[Organization]:
        record = await self.db.organization.find_unique(where={"id": organization_id})
        return _to_organization(record) if record else None

    async def find_by_slug(self, slug: str) -> Optional[Organization]:
        record = await self.db.organization.find_unique(where={"slug": slug})
        return _to_organization(record) if record else None

    async def update(self, organization: Organization) -> None:
        try:
            await self.db.organization.update(
                where={"id": organization.id},
                data={
                    "name": organization.name,
                    "slug": organization.slug,
                    "updatedAt": organization.updated_at,
                },
            )
        except UniqueViolationError as e:
            raise DuplicateKeyError("slug", organization.slug) from e

    async def delete(self, organization_id: str) -> None:
        await self.db.organization.delete_many(where={"id": organization_id})


class PrismaMembershipStore:
    """
    Membership store backed by the ``OrganizationMember`` Prisma model.

    The ``@@unique([userId, organizationId])`` index in the schema is the
    data-layer backstop for one membership per user and organization.
    """

    def __init__(self, db: "Prisma"):
        self.db = db

    async def save(self, membership: Membership) -> None:
        try:
            await self.db.organizationmember.create(
                data={
                    "id": membership.id,
                    "userId": membership.user_id,
                    "organizationId": membership.organization_id,
                    "role": membership.role.value,
                    "createdAt": membership.created_at,
                    "updatedAt": membership.updated_at,
                }
            )
        except UniqueViolationError as e:
            raise DuplicateKeyError(
                "user_id, organization_id",
                f"{membership.user_id}, {membership.organization_id}",
            ) from e

    async def find_by_id(self, membership_id: str) -> Optional[Membership]:
        record = await self.db.organizationmember.find_unique(
            where={"id": membership_id}
        )
        return _to_membership(record) if record else None

    async def find_by_user_and_org(
        self, user_id: str, organization_id: str
    ) -> Optional[Membership]:
        record = await self.db.organizationmember.find_first(
            where={"userId": user_id, "organizationId": organization_id}
        )
        return _to_membership(record) if record else None

    async def find_by_organization_id(self, organization_id: str) -> List[Membership]:
        records = await self.db.organizationmember.find_many(
            where={"organizationId": organization_id},
            order={"createdAt": "asc"},
        )
        return [_to_membership(record) for record in records]

    async def find_by_user_id(self, user_id: str) -> List[Membership]:
        records = await self.db.organizationmember.find_many(
            where={"userId": user_id},
            order={"createdAt": "asc"},
        )
        return [_to_membership(record) for record in records]

    async def update(self, membership: Membership) -> None:
        await self.db.organizationmember.update(
            where={"id": membership.id},
            data={
                "role": membership.role.value,
                "updatedAt": membership.updated_at,
            },
        )

    async def delete(self, membership_id: str) -> None:
        # No-op when the membership is already gone
        await self.db.organizationmember.delete_many(where={"id": membership_id})
