"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field


class JwtPayload(BaseModel):
    """Access token payload structure."""

    sub: Optional[str] = Field(None, description="Subject (user ID)")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    jti: Optional[str] = Field(None, description="JWT ID")

    model_config = {"extra": "allow"}


class Principal(BaseModel):
    """The authenticated caller, as established by the bearer token."""

    user_id: str

    model_config = {"frozen": True}
