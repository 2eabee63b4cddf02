from typing import Awaitable, Callable, NoReturn, Optional, Union

from fastapi import Depends

from todo_api.core.container import Container, get_container
from todo_api.domains.auth.dependencies import get_current_principal
from todo_api.domains.auth.types import Principal
from todo_api.shared.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    MissingAuthError,
    MissingPermissionError,
    NotMemberError,
    UnexpectedError,
)
from todo_api.shared.result import Err

from .gate import GateError, check_permissions
from .models import Permission
from .policies import (
    AuthorizationError,
    Forbidden,
    MissingPermission,
    OrgContext,
    Policy,
    ResourceContext,
)
from .resolver import (
    InvalidRequest,
    MissingAuth,
    NotMember,
    ResolveError,
    resolve_org_context,
)


def raise_for_authorization_error(
    error: Union[ResolveError, GateError, AuthorizationError],
) -> NoReturn:
    """Translate a resolver, gate or policy error into its HTTP error."""
    if isinstance(error, MissingAuth):
        raise MissingAuthError()
    if isinstance(error, InvalidRequest):
        raise InvalidRequestError(error.message)
    if isinstance(error, NotMember):
        raise NotMemberError()
    if isinstance(error, MissingPermission):
        raise MissingPermissionError(error.required.value)
    if isinstance(error, Forbidden):
        raise ForbiddenError(error.message)
    raise UnexpectedError()


async def get_org_context(
    org_id: str,
    principal: Principal = Depends(get_current_principal),
    container: Container = Depends(get_container),
) -> OrgContext:
    """
    Resolve the caller's organization context for the ``org_id`` path parameter.

    Args:
        org_id: Organization ID from path parameter
        principal: Authenticated caller
        container: Application container holding the membership store

    Returns:
        OrgContext for this request

    Raises:
        ApiError: 401 without a principal, 403 for non-members, 500 when the
            membership lookup fails
    """
    result = await resolve_org_context(
        principal.user_id, org_id, container.membership_store
    )
    if isinstance(result, Err):
        raise_for_authorization_error(result.error)
    return result.value


def require_permission(
    *permissions: Permission,
) -> Callable[..., Awaitable[OrgContext]]:
    """
    Dependency factory for role-based authorization.

    Creates a dependency that resolves the caller's organization context and
    checks it against ``permissions``. Several permissions are alternatives:
    holding any one of them is enough.

    Args:
        permissions: The permissions that grant access to the endpoint

    Returns:
        Async dependency function that validates permission and returns the
        organization context
    """
    if not permissions:
        raise ValueError("require_permission needs at least one permission")

    async def check_permission(
        org_context: OrgContext = Depends(get_org_context),
    ) -> OrgContext:
        result = check_permissions(org_context, *permissions)
        if isinstance(result, Err):
            raise_for_authorization_error(result.error)
        return org_context

    return check_permission


def authorize(
    org_context: Optional[OrgContext],
    policy: Policy,
    resource: Optional[ResourceContext] = None,
) -> None:
    """
    Evaluate a policy inside a handler, for checks that need the resource.

    Raises:
        ApiError: 401 without a context, 403 when the policy denies
    """
    if org_context is None:
        raise MissingAuthError()
    result = policy(org_context, resource)
    if isinstance(result, Err):
        raise_for_authorization_error(result.error)
