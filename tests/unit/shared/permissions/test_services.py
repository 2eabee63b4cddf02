"""
Tests for shared permissions service functions.
"""

import pytest

from todo_api.domains.organizations.types import OrganizationRole
from todo_api.shared.permissions.models import ROLE_PERMISSIONS, Permission
from todo_api.shared.permissions.services import get_permissions_for_role


class TestGetPermissionsForRole:
    @pytest.mark.parametrize("role", list(OrganizationRole))
    def test_returns_table_entry(self, role):
        assert get_permissions_for_role(role) == ROLE_PERMISSIONS[role]

    @pytest.mark.parametrize("role", list(OrganizationRole))
    def test_is_deterministic(self, role):
        assert get_permissions_for_role(role) == get_permissions_for_role(role)

    def test_returns_immutable_set(self):
        permissions = get_permissions_for_role(OrganizationRole.member)

        assert isinstance(permissions, frozenset)
        assert not hasattr(permissions, "add")

    def test_accepts_role_value_string(self):
        # OrganizationRole is a str enum, so the raw value hashes the same
        assert get_permissions_for_role("viewer") == ROLE_PERMISSIONS[
            OrganizationRole.viewer
        ]

    def test_unknown_role_raises(self):
        with pytest.raises(KeyError):
            get_permissions_for_role("superuser")  # type: ignore[arg-type]


class TestRoleDifferences:
    def test_member_cannot_delete_todos(self):
        assert Permission.TODOS_DELETE not in get_permissions_for_role(
            OrganizationRole.member
        )

    def test_viewer_can_read_settings_but_member_cannot(self):
        assert Permission.ORG_SETTINGS_READ in get_permissions_for_role(
            OrganizationRole.viewer
        )
        assert Permission.ORG_SETTINGS_READ not in get_permissions_for_role(
            OrganizationRole.member
        )
