# todo_api/domains/organizations/service.py
import asyncio
import logging
import weakref
from dataclasses import replace
from typing import List, Optional

from todo_api.shared.clock import Clock
from todo_api.shared.ids import IdGenerator
from todo_api.shared.result import Err, Ok, Result

from .errors import (
    AddMemberError,
    CannotChangeLastOwner,
    CannotRemoveLastOwner,
    CreateOrganizationError,
    GetOrganizationError,
    ListOrganizationsError,
    MembershipNotFound,
    OrganizationNotFound,
    RemoveMemberError,
    SlugAlreadyExists,
    UnexpectedError,
    UpdateMemberRoleError,
    UpdateOrganizationError,
    UserAlreadyMember,
)
from .stores import DuplicateKeyError, MembershipStore, OrganizationStore
from .types import Membership, Organization, OrganizationRole

logger = logging.getLogger(__name__)


class OrganizationService:
    """
    Organization lifecycle operations.

    Maintains the invariants the authorization layer relies on: every
    organization keeps at least one owner, slugs are unique, and a user has at
    most one membership per organization. Owner-count checks and the mutation
    that follows them run under a per-organization lock, so concurrent
    removals or downgrades served by the same instance cannot strip the last
    owner.
    """

    def __init__(
        self,
        organization_store: OrganizationStore,
        membership_store: MembershipStore,
        id_generator: IdGenerator,
        clock: Clock,
    ):
        self.organization_store = organization_store
        self.membership_store = membership_store
        self.id_generator = id_generator
        self.clock = clock
        # Entries live only while a caller holds or awaits the lock
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, organization_id: str) -> asyncio.Lock:
        lock = self._locks.get(organization_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[organization_id] = lock
        return lock

    async def _discard_organization(self, organization_id: str) -> None:
        try:
            await self.organization_store.delete(organization_id)
        except Exception:
            logger.error(
                f"Failed to roll back organization {organization_id}", exc_info=True
            )

    async def _count_owners(self, organization_id: str) -> int:
        memberships = await self.membership_store.find_by_organization_id(
            organization_id
        )
        return sum(1 for m in memberships if m.role == OrganizationRole.owner)

    async def create_organization(
        self, name: str, slug: str, created_by_user_id: str
    ) -> Result[Organization, CreateOrganizationError]:
        """
        Create a new organization and add the creator as its owner.

        Args:
            name: Display name
            slug: URL-safe unique identifier, matched case-sensitively
            created_by_user_id: User who becomes the first owner

        Returns:
            Ok(Organization), or Err(SlugAlreadyExists | UnexpectedError)
        """
        try:
            if await self.organization_store.find_by_slug(slug) is not None:
                return Err(SlugAlreadyExists(slug=slug))

            now = self.clock.now()
            organization = Organization(
                id=self.id_generator.generate(),
                name=name,
                slug=slug,
                created_at=now,
                updated_at=now,
            )
            owner = Membership(
                id=self.id_generator.generate(),
                user_id=created_by_user_id,
                organization_id=organization.id,
                role=OrganizationRole.owner,
                created_at=now,
                updated_at=now,
            )

            try:
                await self.organization_store.save(organization)
            except DuplicateKeyError:
                return Err(SlugAlreadyExists(slug=slug))

            try:
                await self.membership_store.save(owner)
            except Exception:
                # An organization must not outlive a failed owner write
                await self._discard_organization(organization.id)
                raise
        except Exception as e:
            logger.error(f"Failed to create organization '{slug}'", exc_info=True)
            return Err(UnexpectedError(message="Failed to create organization", cause=e))

        logger.info(
            f"Created organization {organization.id} ('{slug}') "
            f"owned by user {created_by_user_id}"
        )
        return Ok(organization)

    async def get_organization_by_id(
        self, organization_id: str
    ) -> Result[Organization, GetOrganizationError]:
        try:
            organization = await self.organization_store.find_by_id(organization_id)
        except Exception as e:
            logger.error(f"Failed to load organization {organization_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to load organization", cause=e))

        if organization is None:
            return Err(OrganizationNotFound(identifier=organization_id))
        return Ok(organization)

    async def get_organization_by_slug(
        self, slug: str
    ) -> Result[Organization, GetOrganizationError]:
        try:
            organization = await self.organization_store.find_by_slug(slug)
        except Exception as e:
            logger.error(f"Failed to load organization '{slug}'", exc_info=True)
            return Err(UnexpectedError(message="Failed to load organization", cause=e))

        if organization is None:
            return Err(OrganizationNotFound(identifier=slug))
        return Ok(organization)

    async def update_organization(
        self,
        organization_id: str,
        name: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> Result[Organization, UpdateOrganizationError]:
        """
        Rename an organization and/or change its slug.

        Fields left as ``None`` are kept. ``updated_at`` is always stamped.
        """
        try:
            organization = await self.organization_store.find_by_id(organization_id)
            if organization is None:
                return Err(OrganizationNotFound(identifier=organization_id))

            if slug is not None and slug != organization.slug:
                existing = await self.organization_store.find_by_slug(slug)
                if existing is not None and existing.id != organization_id:
                    return Err(SlugAlreadyExists(slug=slug))

            updated = replace(
                organization,
                name=name if name is not None else organization.name,
                slug=slug if slug is not None else organization.slug,
                updated_at=self.clock.now(),
            )
            try:
                await self.organization_store.update(updated)
            except DuplicateKeyError:
                return Err(SlugAlreadyExists(slug=updated.slug))
        except Exception as e:
            logger.error(
                f"Failed to update organization {organization_id}", exc_info=True
            )
            return Err(UnexpectedError(message="Failed to update organization", cause=e))

        logger.info(f"Updated organization {organization_id}")
        return Ok(updated)

    async def list_user_organizations(
        self, user_id: str
    ) -> Result[List[Organization], ListOrganizationsError]:
        """
        List every organization the user belongs to.

        Memberships pointing at an organization that no longer exists are
        skipped rather than failing the whole listing.
        """
        try:
            memberships = await self.membership_store.find_by_user_id(user_id)
            organizations = []
            for membership in memberships:
                organization = await self.organization_store.find_by_id(
                    membership.organization_id
                )
                if organization is None:
                    logger.warning(
                        f"Membership {membership.id} references missing "
                        f"organization {membership.organization_id}"
                    )
                    continue
                organizations.append(organization)
        except Exception as e:
            logger.error(
                f"Failed to list organizations for user {user_id}", exc_info=True
            )
            return Err(UnexpectedError(message="Failed to list organizations", cause=e))

        return Ok(organizations)

    async def add_member(
        self, organization_id: str, user_id: str, role: OrganizationRole
    ) -> Result[Membership, AddMemberError]:
        """
        Add a user to an organization with the given role.

        Re-adding an existing member is rejected with ``UserAlreadyMember``.
        """
        try:
            if await self.organization_store.find_by_id(organization_id) is None:
                return Err(OrganizationNotFound(identifier=organization_id))

            existing = await self.membership_store.find_by_user_and_org(
                user_id, organization_id
            )
            if existing is not None:
                return Err(
                    UserAlreadyMember(user_id=user_id, organization_id=organization_id)
                )

            now = self.clock.now()
            membership = Membership(
                id=self.id_generator.generate(),
                user_id=user_id,
                organization_id=organization_id,
                role=role,
                created_at=now,
                updated_at=now,
            )
            try:
                await self.membership_store.save(membership)
            except DuplicateKeyError:
                return Err(
                    UserAlreadyMember(user_id=user_id, organization_id=organization_id)
                )
        except Exception as e:
            logger.error(
                f"Failed to add user {user_id} to org {organization_id}", exc_info=True
            )
            return Err(UnexpectedError(message="Failed to add member", cause=e))

        logger.info(
            f"Added user {user_id} to org {organization_id} as {role.value}"
        )
        return Ok(membership)

    async def remove_member(
        self, membership_id: str, organization_id: Optional[str] = None
    ) -> Result[None, RemoveMemberError]:
        """
        Remove a membership.

        Args:
            membership_id: Membership to remove
            organization_id: When given, the membership must belong to this
                organization, otherwise it is reported as not found

        Returns:
            Ok(None), or Err(MembershipNotFound | CannotRemoveLastOwner |
            UnexpectedError)
        """
        try:
            membership = await self.membership_store.find_by_id(membership_id)
            if membership is None or (
                organization_id is not None
                and membership.organization_id != organization_id
            ):
                return Err(MembershipNotFound(membership_id=membership_id))

            async with self._lock_for(membership.organization_id):
                # Re-read under the lock; a concurrent request may have changed it
                membership = await self.membership_store.find_by_id(membership_id)
                if membership is None:
                    return Err(MembershipNotFound(membership_id=membership_id))

                if membership.role == OrganizationRole.owner:
                    owners = await self._count_owners(membership.organization_id)
                    if owners <= 1:
                        logger.warning(
                            f"Refused to remove last owner {membership.user_id} "
                            f"from org {membership.organization_id}"
                        )
                        return Err(
                            CannotRemoveLastOwner(
                                organization_id=membership.organization_id
                            )
                        )

                await self.membership_store.delete(membership_id)
        except Exception as e:
            logger.error(f"Failed to remove membership {membership_id}", exc_info=True)
            return Err(UnexpectedError(message="Failed to remove member", cause=e))

        logger.info(
            f"Removed user {membership.user_id} from org {membership.organization_id}"
        )
        return Ok(None)

    async def update_member_role(
        self,
        membership_id: str,
        new_role: OrganizationRole,
        organization_id: Optional[str] = None,
    ) -> Result[Membership, UpdateMemberRoleError]:
        """
        Change a member's role and stamp ``updated_at``.

        Downgrading the only owner is rejected with ``CannotChangeLastOwner``.
        """
        try:
            membership = await self.membership_store.find_by_id(membership_id)
            if membership is None or (
                organization_id is not None
                and membership.organization_id != organization_id
            ):
                return Err(MembershipNotFound(membership_id=membership_id))

            async with self._lock_for(membership.organization_id):
                membership = await self.membership_store.find_by_id(membership_id)
                if membership is None:
                    return Err(MembershipNotFound(membership_id=membership_id))

                if (
                    membership.role == OrganizationRole.owner
                    and new_role != OrganizationRole.owner
                ):
                    owners = await self._count_owners(membership.organization_id)
                    if owners <= 1:
                        logger.warning(
                            f"Refused to downgrade last owner {membership.user_id} "
                            f"of org {membership.organization_id}"
                        )
                        return Err(
                            CannotChangeLastOwner(
                                organization_id=membership.organization_id
                            )
                        )

                updated = replace(
                    membership, role=new_role, updated_at=self.clock.now()
                )
                await self.membership_store.update(updated)
        except Exception as e:
            logger.error(
                f"Failed to update role of membership {membership_id}", exc_info=True
            )
            return Err(UnexpectedError(message="Failed to update member role", cause=e))

        logger.info(
            f"Changed role of user {updated.user_id} in org "
            f"{updated.organization_id} to {new_role.value}"
        )
        return Ok(updated)

    async def list_members(
        self, organization_id: str
    ) -> Result[List[Membership], UnexpectedError]:
        try:
            members = await self.membership_store.find_by_organization_id(
                organization_id
            )
        except Exception as e:
            logger.error(
                f"Failed to list members of org {organization_id}", exc_info=True
            )
            return Err(UnexpectedError(message="Failed to list members", cause=e))
        return Ok(members)
