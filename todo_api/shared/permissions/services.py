from typing import FrozenSet

from todo_api.domains.organizations.types import OrganizationRole

from .models import ROLE_PERMISSIONS, Permission


def get_permissions_for_role(role: OrganizationRole) -> FrozenSet[Permission]:
    """
    Resolve the permission set granted by a role.

    The role type is closed, so every role has an entry; an unknown value is
    a programming error and raises ``KeyError``.

    Args:
        role: The organization role to resolve

    Returns:
        Immutable set of permissions for the role
    """
    return ROLE_PERMISSIONS[role]
