"""Auth Schemas: registration/login payloads and the token envelope.

Invariants:
    - name, email, password are required and non-blank
    - email is stripped and lower-cased before lookup or storage
    - Responses never carry the password hash
"""

from pydantic import Field, field_validator

from tracker.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=200)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserPublic(CamelModel):
    """Public user fields: safe to return to any client."""
    id: int
    name: str
    email: str


class AuthResponse(CamelModel):
    user: UserPublic
    token: str


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    local, sep, domain = value.partition("@")
    if not sep or not local or "." not in domain:
        raise ValueError("email must look like name@example.com")
    return value
