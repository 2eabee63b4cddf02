# todo_api/domains/organizations/models.py
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .types import Membership, Organization, OrganizationRole

SLUG_PATTERN = r"^[a-z0-9-]+$"


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)


class OrganizationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(
        None, min_length=1, max_length=100, pattern=SLUG_PATTERN
    )

    @model_validator(mode="after")
    def validate_has_update(self) -> "OrganizationUpdate":
        if self.name is None and self.slug is None:
            raise ValueError("At least one field must be provided for update")
        return self


class AddMemberRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    role: OrganizationRole = OrganizationRole.member


class UpdateMemberRoleRequest(BaseModel):
    role: OrganizationRole


class OrganizationResponse(BaseModel):
    id: str
    name: str
    slug: str
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, organization: Organization) -> "OrganizationResponse":
        return cls(
            id=organization.id,
            name=organization.name,
            slug=organization.slug,
            created_at=organization.created_at.isoformat(),
            updated_at=organization.updated_at.isoformat(),
        )


class MembershipResponse(BaseModel):
    id: str
    user_id: str
    organization_id: str
    role: OrganizationRole
    created_at: str
    updated_at: str

    @classmethod
    def from_domain(cls, membership: Membership) -> "MembershipResponse":
        return cls(
            id=membership.id,
            user_id=membership.user_id,
            organization_id=membership.organization_id,
            role=membership.role,
            created_at=membership.created_at.isoformat(),
            updated_at=membership.updated_at.isoformat(),
        )
