# todo_api/shared/exceptions.py
from typing import Optional

from fastapi import HTTPException, status


class ApiError(HTTPException):
    """
    HTTP error with a machine-readable code.

    Rendered by the application as ``{"message": detail, "code": code}``.
    """

    code: str = "UNEXPECTED_ERROR"
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            status_code=self.status_code_default,
            detail=message or self.message_default,
        )


# Authentication & Authorization Exceptions
class InvalidTokenError(ApiError):
    code = "INVALID_TOKEN"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Missing or invalid token"


class MissingAuthError(ApiError):
    code = "MISSING_AUTH"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Authentication required"


class NotMemberError(ApiError):
    code = "NOT_MEMBER"
    status_code_default = status.HTTP_403_FORBIDDEN
    message_default = "Not a member of this organization"


class MissingPermissionError(ApiError):
    code = "MISSING_PERMISSION"
    status_code_default = status.HTTP_403_FORBIDDEN
    message_default = "Missing required permission"

    def __init__(self, required: str) -> None:
        super().__init__(f"Missing required permission: {required}")
        self.required = required


class ForbiddenError(ApiError):
    code = "FORBIDDEN"
    status_code_default = status.HTTP_403_FORBIDDEN
    message_default = "Forbidden"


# Resource Not Found Exceptions
class OrganizationNotFoundError(ApiError):
    code = "ORGANIZATION_NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Organization not found"


class MembershipNotFoundError(ApiError):
    code = "MEMBERSHIP_NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Membership not found"


class TodoNotFoundError(ApiError):
    code = "TODO_NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Todo not found"


# Conflict Exceptions
class SlugAlreadyExistsError(ApiError):
    code = "SLUG_ALREADY_EXISTS"
    status_code_default = status.HTTP_409_CONFLICT

    def __init__(self, slug: str) -> None:
        super().__init__(f"Slug '{slug}' is already in use")
        self.slug = slug


class UserAlreadyMemberError(ApiError):
    code = "USER_ALREADY_MEMBER"
    status_code_default = status.HTTP_409_CONFLICT

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User '{user_id}' is already a member of this organization")
        self.user_id = user_id


# Validation / Request Exceptions
class InvalidRequestError(ApiError):
    code = "INVALID_REQUEST"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Invalid request data"


class CannotRemoveLastOwnerError(ApiError):
    code = "CANNOT_REMOVE_LAST_OWNER"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Cannot remove the last owner"


class CannotChangeLastOwnerError(ApiError):
    code = "CANNOT_CHANGE_LAST_OWNER"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Cannot change the role of the last owner"


class InvalidTodoIdError(ApiError):
    code = "INVALID_TODO_ID"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Invalid todo ID format"


class TodoAlreadyCompletedError(ApiError):
    code = "TODO_ALREADY_COMPLETED"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Todo already completed"


# Infrastructure Exceptions
class UnexpectedError(ApiError):
    code = "UNEXPECTED_ERROR"
