"""
Tests for the policy combinators in todo_api/shared/permissions/policies.py
"""

from dataclasses import FrozenInstanceError

import pytest

from todo_api.domains.organizations.types import OrganizationRole
from todo_api.shared.permissions import require_permission_policy
from todo_api.shared.permissions.models import Permission
from todo_api.shared.permissions.policies import (
    Forbidden,
    MissingPermission,
    OrgContext,
    custom,
    require_all_permissions,
    require_any_permission,
    require_creator_or_permission,
    require_permission,
)
from todo_api.shared.result import Err, Ok


class TestOrgContext:
    def test_is_immutable(self, member_context: OrgContext):
        with pytest.raises(FrozenInstanceError):
            member_context.permissions = frozenset(Permission)  # type: ignore[misc]

    def test_user_id_comes_from_membership(self, member_context: OrgContext):
        assert member_context.user_id == member_context.membership.user_id


class TestRequirePermission:
    @pytest.mark.parametrize("role", list(OrganizationRole))
    def test_ok_iff_permission_held(self, make_org_context, role):
        context = make_org_context(role)
        for permission in Permission:
            result = require_permission(permission)(context, None)
            assert result.is_ok() == (permission in context.permissions)

    def test_denial_reports_required_and_available(self, member_context: OrgContext):
        result = require_permission(Permission.TODOS_DELETE)(member_context, None)

        assert isinstance(result, Err)
        assert result.error == MissingPermission(
            required=Permission.TODOS_DELETE, available=member_context.permissions
        )
        assert result.error.code == "MISSING_PERMISSION"

    def test_does_not_mutate_context(self, member_context: OrgContext):
        before = member_context.permissions
        require_permission(Permission.ORG_DELETE)(member_context, None)
        assert member_context.permissions is before

    def test_exported_from_package_as_policy(self, member_context: OrgContext):
        policy = require_permission_policy(Permission.TODOS_DELETE)

        assert require_permission_policy is require_permission
        assert policy(member_context, None) == Err(
            MissingPermission(
                required=Permission.TODOS_DELETE, available=member_context.permissions
            )
        )


class TestRequireAnyPermission:
    def test_ok_when_one_present(self, member_context: OrgContext):
        policy = require_any_permission(Permission.TODOS_DELETE, Permission.TODOS_READ)
        assert isinstance(policy(member_context, None), Ok)

    def test_reports_first_argument_on_denial(self, viewer_context: OrgContext):
        policy = require_any_permission(
            Permission.TODOS_DELETE, Permission.TODOS_CREATE
        )
        result = policy(viewer_context, None)

        assert isinstance(result, Err)
        assert result.error.required == Permission.TODOS_DELETE

    def test_argument_order_decides_reported_permission(
        self, viewer_context: OrgContext
    ):
        policy = require_any_permission(
            Permission.TODOS_CREATE, Permission.TODOS_DELETE
        )
        result = policy(viewer_context, None)

        assert isinstance(result, Err)
        assert result.error.required == Permission.TODOS_CREATE

    @pytest.mark.parametrize("role", list(OrganizationRole))
    def test_ok_iff_either_held(self, make_org_context, role):
        context = make_org_context(role)
        a, b = Permission.TODOS_DELETE, Permission.ORG_SETTINGS_READ
        result = require_any_permission(a, b)(context, None)
        assert result.is_ok() == (a in context.permissions or b in context.permissions)

    def test_requires_at_least_one_permission(self):
        with pytest.raises(ValueError):
            require_any_permission()


class TestRequireAllPermissions:
    def test_ok_when_all_present(self, owner_context: OrgContext):
        policy = require_all_permissions(Permission.ORG_DELETE, Permission.TODOS_READ)
        assert isinstance(policy(owner_context, None), Ok)

    def test_short_circuits_on_first_missing(self, viewer_context: OrgContext):
        policy = require_all_permissions(
            Permission.TODOS_DELETE, Permission.TODOS_CREATE
        )
        result = policy(viewer_context, None)

        assert isinstance(result, Err)
        assert result.error.required == Permission.TODOS_DELETE

    def test_reports_first_missing_in_input_order(self, member_context: OrgContext):
        policy = require_all_permissions(
            Permission.TODOS_READ, Permission.ORG_DELETE, Permission.TODOS_DELETE
        )
        result = policy(member_context, None)

        assert isinstance(result, Err)
        assert result.error.required == Permission.ORG_DELETE

    def test_requires_at_least_one_permission(self):
        with pytest.raises(ValueError):
            require_all_permissions()


class TestRequireCreatorOrPermission:
    @pytest.mark.parametrize("role", list(OrganizationRole))
    def test_creator_always_allowed(self, make_org_context, role):
        context = make_org_context(role)
        policy = require_creator_or_permission(Permission.TODOS_COMPLETE)

        result = policy(context, {"created_by": context.membership.user_id})

        assert isinstance(result, Ok)

    def test_non_creator_falls_back_to_permission(self, make_org_context):
        policy = require_creator_or_permission(Permission.TODOS_COMPLETE)
        resource = {"created_by": "someone-else"}

        assert isinstance(
            policy(make_org_context(OrganizationRole.member), resource), Ok
        )
        result = policy(make_org_context(OrganizationRole.viewer), resource)
        assert isinstance(result, Err)
        assert result.error.required == Permission.TODOS_COMPLETE

    def test_missing_resource_context_fails_closed(self, viewer_context: OrgContext):
        policy = require_creator_or_permission(Permission.TODOS_COMPLETE)

        result = policy(viewer_context, None)

        assert isinstance(result, Err)
        assert isinstance(result.error, MissingPermission)

    def test_missing_resource_context_still_checks_permission(
        self, owner_context: OrgContext
    ):
        policy = require_creator_or_permission(Permission.TODOS_COMPLETE)
        assert isinstance(policy(owner_context, None), Ok)

    def test_resource_without_created_by_is_not_creator(
        self, viewer_context: OrgContext
    ):
        policy = require_creator_or_permission(Permission.TODOS_COMPLETE)
        assert isinstance(policy(viewer_context, {"title": "x"}), Err)


class TestCustom:
    def test_ok_when_predicate_true(self, viewer_context: OrgContext):
        policy = custom(lambda ctx, resource: True, "never shown")
        assert isinstance(policy(viewer_context, None), Ok)

    def test_forbidden_with_message_when_predicate_false(
        self, owner_context: OrgContext
    ):
        policy = custom(lambda ctx, resource: False, "Todos are locked")

        result = policy(owner_context, None)

        assert isinstance(result, Err)
        assert result.error == Forbidden(message="Todos are locked")
        assert result.error.code == "FORBIDDEN"

    def test_predicate_receives_context_and_resource(
        self, member_context: OrgContext
    ):
        seen = []
        policy = custom(lambda ctx, resource: seen.append((ctx, resource)) or True, "")

        policy(member_context, {"created_by": "user-2"})

        assert seen == [(member_context, {"created_by": "user-2"})]
