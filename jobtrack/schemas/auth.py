"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from jobtrack.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class CredentialsRequest(BaseModel):
    """Username and password, used by both register and login."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class IdentityResponse(BaseModel):
    """Public identity of an account (no password hash, no role)."""

    id: int
    username: str

    class Config:
        from_attributes = True
