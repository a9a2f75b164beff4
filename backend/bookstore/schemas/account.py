"""Account Schemas — Pydantic models for registration, login and profile boundaries.

Invariants:
    - Passwords are 1-72 UTF-8 bytes at every boundary (register, login, profile):
      newer bcrypt releases refuse longer input, so it must never reach the hasher
    - Emails are validated (EmailStr) and lower-cased before reaching services
    - Registration never accepts a role: new accounts are always standard
    - AccountResponse never carries the password hash
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

MAX_PASSWORD_BYTES = 72


def _check_password(v: str) -> str:
    if not v:
        raise ValueError("password cannot be empty")
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class AccountCreate(BaseModel):
    """Registration payload."""
    email: EmailStr
    password: str
    first_name: str = Field("", max_length=100, alias="firstname")
    last_name: str = Field("", max_length=100, alias="lastname")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_password(v)


class ProfileUpdate(BaseModel):
    """Partial profile update — empty or missing fields are left unchanged."""
    email: EmailStr | None = None
    password: str | None = None
    first_name: str | None = Field(None, max_length=100, alias="firstname")
    last_name: str | None = Field(None, max_length=100, alias="lastname")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str | None) -> str | None:
        return _check_password(v) if v else None


class AccountResponse(BaseModel):
    """Account response — public-facing account data."""
    id: int
    first_name: str
    last_name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Returned by register and login."""
    success: bool = True
    message: str
    token: str
    account: AccountResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str
