import logging
from typing import Optional, Union

from todo_api.shared.result import Err, Ok, Result

from .models import Permission
from .policies import (
    AuthorizationError,
    OrgContext,
    require_any_permission,
    require_permission,
)
from .resolver import MissingAuth

logger = logging.getLogger(__name__)

GateError = Union[MissingAuth, AuthorizationError]


def check_permissions(
    org_context: Optional[OrgContext], *permissions: Permission
) -> Result[None, GateError]:
    """
    Check a resolved organization context against one or more permissions.

    A single permission is checked with ``require_permission``; several are
    combined with OR semantics. An absent context means the resolver never
    ran for this request and is reported as ``MissingAuth``.

    Args:
        org_context: Context produced by the membership resolver
        permissions: Permissions that grant access, at least one

    Returns:
        Ok(None) if allowed, Err(GateError) otherwise
    """
    if not permissions:
        raise ValueError("check_permissions needs at least one permission")

    if org_context is None:
        return Err(MissingAuth())

    if len(permissions) == 1:
        policy = require_permission(permissions[0])
    else:
        policy = require_any_permission(*permissions)

    result = policy(org_context, None)
    if isinstance(result, Err):
        logger.warning(
            f"User {org_context.user_id} denied in org {org_context.organization_id}: "
            f"requires {', '.join(p.value for p in permissions)}"
        )
        return result
    return Ok(None)
