"""
Tests for the in-memory organization and membership stores.
"""

from dataclasses import replace

import pytest

from todo_api.domains.organizations.in_memory import (
    InMemoryMembershipStore,
    InMemoryOrganizationStore,
)
from todo_api.domains.organizations.stores import DuplicateKeyError
from todo_api.domains.organizations.types import Organization, OrganizationRole


class TestInMemoryOrganizationStore:
    @pytest.mark.asyncio
    async def test_save_and_find(
        self, organization_store: InMemoryOrganizationStore, organization: Organization
    ):
        await organization_store.save(organization)

        assert await organization_store.find_by_id(organization.id) == organization
        assert await organization_store.find_by_slug(organization.slug) == organization
        assert await organization_store.find_by_slug("other") is None

    @pytest.mark.asyncio
    async def test_duplicate_slug_raises(
        self, organization_store: InMemoryOrganizationStore, organization: Organization
    ):
        await organization_store.save(organization)

        with pytest.raises(DuplicateKeyError) as exc_info:
            await organization_store.save(replace(organization, id="another-id"))

        assert exc_info.value.key == "slug"
        assert exc_info.value.value == organization.slug

    @pytest.mark.asyncio
    async def test_update_moves_slug_index(
        self, organization_store: InMemoryOrganizationStore, organization: Organization
    ):
        await organization_store.save(organization)

        await organization_store.update(replace(organization, slug="renamed"))

        assert await organization_store.find_by_slug(organization.slug) is None
        assert (await organization_store.find_by_slug("renamed")).id == organization.id

    @pytest.mark.asyncio
    async def test_update_to_taken_slug_raises(
        self, organization_store: InMemoryOrganizationStore, organization: Organization
    ):
        await organization_store.save(organization)
        await organization_store.save(replace(organization, id="other", slug="other"))

        with pytest.raises(DuplicateKeyError):
            await organization_store.update(replace(organization, slug="other"))

    @pytest.mark.asyncio
    async def test_delete_frees_slug(
        self, organization_store: InMemoryOrganizationStore, organization: Organization
    ):
        await organization_store.save(organization)

        await organization_store.delete(organization.id)

        assert await organization_store.find_by_id(organization.id) is None
        assert await organization_store.find_by_slug(organization.slug) is None
        await organization_store.save(replace(organization, id="another-id"))

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(
        self, organization_store: InMemoryOrganizationStore
    ):
        await organization_store.delete("missing")


class TestInMemoryMembershipStore:
    @pytest.mark.asyncio
    async def test_unique_per_user_and_org(
        self, membership_store: InMemoryMembershipStore, make_membership
    ):
        await membership_store.save(make_membership(OrganizationRole.owner))

        with pytest.raises(DuplicateKeyError):
            await membership_store.save(
                make_membership(OrganizationRole.member, membership_id="membership-2")
            )

    @pytest.mark.asyncio
    async def test_indexes_follow_delete(
        self, membership_store: InMemoryMembershipStore, make_membership
    ):
        membership = make_membership(OrganizationRole.member)
        await membership_store.save(membership)

        await membership_store.delete(membership.id)

        assert await membership_store.find_by_id(membership.id) is None
        assert (
            await membership_store.find_by_user_and_org(
                membership.user_id, membership.organization_id
            )
            is None
        )
        assert await membership_store.find_by_organization_id(
            membership.organization_id
        ) == []
        assert await membership_store.find_by_user_id(membership.user_id) == []

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self, membership_store: InMemoryMembershipStore):
        await membership_store.delete("missing")

    @pytest.mark.asyncio
    async def test_user_can_rejoin_after_removal(
        self, membership_store: InMemoryMembershipStore, make_membership
    ):
        first = make_membership(OrganizationRole.member)
        await membership_store.save(first)
        await membership_store.delete(first.id)

        await membership_store.save(
            make_membership(OrganizationRole.viewer, membership_id="membership-2")
        )

        found = await membership_store.find_by_user_and_org(
            first.user_id, first.organization_id
        )
        assert found.id == "membership-2"
