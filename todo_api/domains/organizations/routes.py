# todo_api/domains/organizations/routes.py
from typing import List, NoReturn

from fastapi import APIRouter, Depends, status

from todo_api.core.container import Container, get_container
from todo_api.domains.auth.dependencies import get_current_principal
from todo_api.domains.auth.types import Principal
from todo_api.domains.organizations.models import (
    AddMemberRequest,
    MembershipResponse,
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
    UpdateMemberRoleRequest,
)
from todo_api.shared import exceptions
from todo_api.shared.permissions import OrgContext, Permission, require_permission
from todo_api.shared.result import Err

from . import errors

# Add a prefix and tag to group this route clearly in OpenAPI
router = APIRouter(prefix="/organizations", tags=["Organizations"])


def raise_for_error(error: object) -> NoReturn:
    """Map an organization service error to its HTTP error."""
    if isinstance(error, errors.SlugAlreadyExists):
        raise exceptions.SlugAlreadyExistsError(error.slug)
    if isinstance(error, errors.OrganizationNotFound):
        raise exceptions.OrganizationNotFoundError()
    if isinstance(error, errors.UserAlreadyMember):
        raise exceptions.UserAlreadyMemberError(error.user_id)
    if isinstance(error, errors.MembershipNotFound):
        raise exceptions.MembershipNotFoundError()
    if isinstance(error, errors.CannotRemoveLastOwner):
        raise exceptions.CannotRemoveLastOwnerError()
    if isinstance(error, errors.CannotChangeLastOwner):
        raise exceptions.CannotChangeLastOwnerError()
    raise exceptions.UnexpectedError()


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createOrganization",
)
async def create_organization(
    organization_data: OrganizationCreate,
    principal: Principal = Depends(get_current_principal),
    container: Container = Depends(get_container),
) -> OrganizationResponse:
    """Create a new organization and add the current user as owner."""
    result = await container.organization_service.create_organization(
        organization_data.name, organization_data.slug, principal.user_id
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
    return OrganizationResponse.from_domain(result.value)


@router.get(
    "",
    response_model=List[OrganizationResponse],
    operation_id="listOrganizations",
)
async def list_organizations(
    principal: Principal = Depends(get_current_principal),
    container: Container = Depends(get_container),
) -> List[OrganizationResponse]:
    result = await container.organization_service.list_user_organizations(
        principal.user_id
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
    return [OrganizationResponse.from_domain(o) for o in result.value]


@router.get(
    "/{org_id}",
    response_model=OrganizationResponse,
    operation_id="getOrganization",
)
async def get_organization(
    org_id: str,
    org_context: OrgContext = Depends(
        require_permission(Permission.ORG_SETTINGS_READ, Permission.ORG_MEMBERS_READ)
    ),
    container: Container = Depends(get_container),
) -> OrganizationResponse:
    result = await container.organization_service.get_organization_by_id(org_id)
    if isinstance(result, Err):
        raise_for_error(result.error)
    return OrganizationResponse.from_domain(result.value)


@router.patch(
    "/{org_id}",
    response_model=OrganizationResponse,
    operation_id="updateOrganization",
)
async def update_organization(
    org_id: str,
    updates: OrganizationUpdate,
    org_context: OrgContext = Depends(
        require_permission(Permission.ORG_SETTINGS_UPDATE)
    ),
    container: Container = Depends(get_container),
) -> OrganizationResponse:
    """Rename an organization or change its slug."""
    result = await container.organization_service.update_organization(
        org_id, name=updates.name, slug=updates.slug
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
    return OrganizationResponse.from_domain(result.value)


@router.get(
    "/{org_id}/members",
    response_model=List[MembershipResponse],
    operation_id="getOrganizationMembers",
)
async def get_organization_members(
    org_id: str,
    org_context: OrgContext = Depends(require_permission(Permission.ORG_MEMBERS_READ)),
    container: Container = Depends(get_container),
) -> List[MembershipResponse]:
    result = await container.organization_service.list_members(org_id)
    if isinstance(result, Err):
        raise_for_error(result.error)
    return [MembershipResponse.from_domain(m) for m in result.value]


@router.post(
    "/{org_id}/members",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="addOrganizationMember",
)
async def add_organization_member(
    org_id: str,
    member_data: AddMemberRequest,
    org_context: OrgContext = Depends(
        require_permission(Permission.ORG_MEMBERS_INVITE)
    ),
    container: Container = Depends(get_container),
) -> MembershipResponse:
    result = await container.organization_service.add_member(
        org_id, member_data.user_id, member_data.role
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
    return MembershipResponse.from_domain(result.value)


@router.patch(
    "/{org_id}/members/{membership_id}",
    response_model=MembershipResponse,
    operation_id="updateOrganizationMemberRole",
)
async def update_organization_member_role(
    org_id: str,
    membership_id: str,
    updates: UpdateMemberRoleRequest,
    org_context: OrgContext = Depends(
        require_permission(Permission.ORG_MEMBERS_UPDATE_ROLE)
    ),
    container: Container = Depends(get_container),
) -> MembershipResponse:
    """
    Change a member's role.

    Business rules:
    - The membership must belong to this organization
    - The last owner cannot be downgraded
    """
    result = await container.organization_service.update_member_role(
        membership_id, updates.role, organization_id=org_id
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
    return MembershipResponse.from_domain(result.value)


@router.delete(
    "/{org_id}/members/{membership_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="removeOrganizationMember",
)
async def remove_organization_member(
    org_id: str,
    membership_id: str,
    org_context: OrgContext = Depends(
        require_permission(Permission.ORG_MEMBERS_REMOVE)
    ),
    container: Container = Depends(get_container),
) -> None:
    """
    Remove a member from the organization.

    Business rules:
    - The membership must belong to this organization
    - The last owner cannot be removed
    """
    result = await container.organization_service.remove_member(
        membership_id, organization_id=org_id
    )
    if isinstance(result, Err):
        raise_for_error(result.error)
