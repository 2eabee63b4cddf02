"""
Operation-specific error variants for the organization lifecycle service.

Each variant carries a ``code`` so callers can dispatch on it without
isinstance chains, and the fields a caller needs to react (e.g. the slug
that conflicted).
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class SlugAlreadyExists:
    code: ClassVar[str] = "SLUG_ALREADY_EXISTS"
    slug: str


@dataclass(frozen=True)
class OrganizationNotFound:
    code: ClassVar[str] = "ORGANIZATION_NOT_FOUND"
    identifier: str


@dataclass(frozen=True)
class UserAlreadyMember:
    code: ClassVar[str] = "USER_ALREADY_MEMBER"
    user_id: str
    organization_id: str


@dataclass(frozen=True)
class MembershipNotFound:
    code: ClassVar[str] = "MEMBERSHIP_NOT_FOUND"
    membership_id: str


@dataclass(frozen=True)
class CannotRemoveLastOwner:
    code: ClassVar[str] = "CANNOT_REMOVE_LAST_OWNER"
    organization_id: str


@dataclass(frozen=True)
class CannotChangeLastOwner:
    code: ClassVar[str] = "CANNOT_CHANGE_LAST_OWNER"
    organization_id: str


@dataclass(frozen=True)
class UnexpectedError:
    code: ClassVar[str] = "UNEXPECTED_ERROR"
    message: str
    cause: Optional[BaseException] = None


CreateOrganizationError = Union[SlugAlreadyExists, UnexpectedError]
GetOrganizationError = Union[OrganizationNotFound, UnexpectedError]
UpdateOrganizationError = Union[
    OrganizationNotFound, SlugAlreadyExists, UnexpectedError
]
AddMemberError = Union[OrganizationNotFound, UserAlreadyMember, UnexpectedError]
RemoveMemberError = Union[MembershipNotFound, CannotRemoveLastOwner, UnexpectedError]
UpdateMemberRoleError = Union[
    MembershipNotFound, CannotChangeLastOwner, UnexpectedError
]
ListOrganizationsError = UnexpectedError
