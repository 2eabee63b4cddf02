import logging
from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from todo_api.domains.organizations.stores import MembershipStore
from todo_api.shared.result import Err, Ok, Result

from .policies import OrgContext
from .services import get_permissions_for_role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingAuth:
    code: ClassVar[str] = "MISSING_AUTH"


@dataclass(frozen=True)
class InvalidRequest:
    code: ClassVar[str] = "INVALID_REQUEST"
    message: str


@dataclass(frozen=True)
class NotMember:
    code: ClassVar[str] = "NOT_MEMBER"
    organization_id: str


@dataclass(frozen=True)
class ResolverUnexpectedError:
    code: ClassVar[str] = "UNEXPECTED_ERROR"
    message: str
    cause: Optional[BaseException] = None


ResolveError = Union[MissingAuth, InvalidRequest, NotMember, ResolverUnexpectedError]


async def resolve_org_context(
    user_id: Optional[str],
    organization_id: Optional[str],
    membership_store: MembershipStore,
) -> Result[OrgContext, ResolveError]:
    """
    Resolve the caller's membership and permissions for one organization.

    Performs a single point lookup on ``(user_id, organization_id)``. A
    missing organization and a missing membership both yield ``NotMember``
    so callers cannot discover which organizations exist.

    Args:
        user_id: Authenticated principal's user ID, if any
        organization_id: Target organization ID from the request
        membership_store: Store used for the membership lookup

    Returns:
        Ok(OrgContext) on success, Err(ResolveError) otherwise
    """
    if not user_id:
        logger.warning("Organization context requested without a principal")
        return Err(MissingAuth())

    if not organization_id:
        logger.warning(f"User {user_id} requested org context without an org id")
        return Err(InvalidRequest(message="Organization ID is required"))

    try:
        membership = await membership_store.find_by_user_and_org(
            user_id, organization_id
        )
    except Exception as e:
        logger.error(
            f"Membership lookup failed for user {user_id} in org {organization_id}",
            exc_info=True,
        )
        return Err(
            ResolverUnexpectedError(message="Failed to resolve membership", cause=e)
        )

    if membership is None:
        logger.warning(f"User {user_id} is not a member of org {organization_id}")
        return Err(NotMember(organization_id=organization_id))

    return Ok(
        OrgContext(
            organization_id=organization_id,
            membership=membership,
            permissions=get_permissions_for_role(membership.role),
        )
    )
