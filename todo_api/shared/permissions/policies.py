"""
Policy engine for organization-scoped authorization.

A policy is a plain callable ``(OrgContext, ResourceContext | None) -> Result``.
Policies are built by the combinators in this module and composed as values;
they only read the context, never mutate it and never perform I/O, so they can
be unit tested without any web framework.

Usage:
    policy = require_creator_or_permission(Permission.TODOS_COMPLETE)
    result = policy(org_context, {"created_by": todo.created_by})
    if isinstance(result, Err):
        ...
"""

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, FrozenSet, Mapping, Optional, Union

from todo_api.domains.organizations.types import Membership
from todo_api.shared.result import Err, Ok, Result

from .models import Permission

ResourceContext = Mapping[str, Any]


@dataclass(frozen=True)
class OrgContext:
    """
    Authorization context for one request in one organization.

    Produced once by the membership resolver and passed explicitly to gates
    and handlers. Never persisted or shared across requests.
    """

    organization_id: str
    membership: Membership
    permissions: FrozenSet[Permission]

    @property
    def user_id(self) -> str:
        return self.membership.user_id


@dataclass(frozen=True)
class MissingPermission:
    code: ClassVar[str] = "MISSING_PERMISSION"
    required: Permission
    available: FrozenSet[Permission]


@dataclass(frozen=True)
class Forbidden:
    code: ClassVar[str] = "FORBIDDEN"
    message: str


AuthorizationError = Union[MissingPermission, Forbidden]
PolicyResult = Result[None, AuthorizationError]
Policy = Callable[[OrgContext, Optional[ResourceContext]], PolicyResult]


def _missing(required: Permission, context: OrgContext) -> Err[MissingPermission]:
    return Err(MissingPermission(required=required, available=context.permissions))


def require_permission(permission: Permission) -> Policy:
    """Allow iff the context holds ``permission``."""

    def policy(
        context: OrgContext, resource: Optional[ResourceContext] = None
    ) -> PolicyResult:
        if permission in context.permissions:
            return Ok(None)
        return _missing(permission, context)

    return policy


def require_any_permission(*permissions: Permission) -> Policy:
    """
    Allow iff the context holds at least one of ``permissions`` (OR).

    On denial the first requested permission is reported as ``required``,
    regardless of which one was closer to being satisfied.
    """
    if not permissions:
        raise ValueError("require_any_permission needs at least one permission")

    def policy(
        context: OrgContext, resource: Optional[ResourceContext] = None
    ) -> PolicyResult:
        if any(p in context.permissions for p in permissions):
            return Ok(None)
        return _missing(permissions[0], context)

    return policy


def require_all_permissions(*permissions: Permission) -> Policy:
    """
    Allow iff the context holds every one of ``permissions`` (AND).

    Stops at the first missing permission, in input order, and reports it.
    """
    if not permissions:
        raise ValueError("require_all_permissions needs at least one permission")

    def policy(
        context: OrgContext, resource: Optional[ResourceContext] = None
    ) -> PolicyResult:
        for permission in permissions:
            if permission not in context.permissions:
                return _missing(permission, context)
        return Ok(None)

    return policy


def require_creator_or_permission(permission: Permission) -> Policy:
    """
    Allow the resource's creator, otherwise fall back to ``permission``.

    A missing resource context counts as "not the creator"; the permission
    check still runs.
    """
    fallback = require_permission(permission)

    def policy(
        context: OrgContext, resource: Optional[ResourceContext] = None
    ) -> PolicyResult:
        created_by = resource.get("created_by") if resource is not None else None
        if created_by is not None and created_by == context.membership.user_id:
            return Ok(None)
        return fallback(context, resource)

    return policy


def custom(
    predicate: Callable[[OrgContext, Optional[ResourceContext]], bool],
    message: str,
) -> Policy:
    """Escape hatch for rules that do not reduce to permission checks."""

    def policy(
        context: OrgContext, resource: Optional[ResourceContext] = None
    ) -> PolicyResult:
        if predicate(context, resource):
            return Ok(None)
        return Err(Forbidden(message=message))

    return policy
