"""
Shared permission system for role-based access control.

This module provides the role catalog, the policy combinators, the membership
resolver and the FastAPI dependencies that gate organization-scoped routes.

Usage:
    from todo_api.shared.permissions import Permission, require_permission

    @router.get("/{org_id}/todos")
    async def list_todos(
        org_context: OrgContext = Depends(
            require_permission(Permission.TODOS_READ)
        )
    ):
        pass

``require_permission`` here is the route dependency. The single-permission
policy combinator of the same name in ``policies`` is exported as
``require_permission_policy``:

    policy = require_permission_policy(Permission.TODOS_DELETE)
    result = policy(org_context, None)
"""

from .dependencies import authorize, get_org_context, require_permission
from .gate import check_permissions
from .models import ROLE_PERMISSIONS, Permission
from .policies import (
    OrgContext,
    custom,
    require_all_permissions,
    require_any_permission,
    require_creator_or_permission,
)
from .policies import require_permission as require_permission_policy
from .resolver import resolve_org_context
from .services import get_permissions_for_role

__all__ = [
    "OrgContext",
    "Permission",
    "ROLE_PERMISSIONS",
    "authorize",
    "check_permissions",
    "custom",
    "get_org_context",
    "get_permissions_for_role",
    "require_all_permissions",
    "require_any_permission",
    "require_creator_or_permission",
    "require_permission",
    "require_permission_policy",
    "resolve_org_context",
]
