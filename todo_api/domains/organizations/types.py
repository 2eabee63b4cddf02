"""Organization domain type definitions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class OrganizationRole(str, Enum):
    """
    Organization roles, ranked ``owner > admin > member > viewer``.

    - owner: Full control including deleting the organization
    - admin: Can manage members and all todos
    - member: Can create and manage own todos
    - viewer: Read-only access
    """

    owner = "owner"
    admin = "admin"
    member = "member"
    viewer = "viewer"


@dataclass(frozen=True)
class Organization:
    id: str
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Membership:
    """Links a user to an organization with a specific role."""

    id: str
    user_id: str
    organization_id: str
    role: OrganizationRole
    created_at: datetime
    updated_at: datetime
