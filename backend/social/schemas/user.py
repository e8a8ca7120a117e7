"""User Schemas — request/response contracts for user creation.

Invariants:
    - UserCreate: username/email stripped and non-empty, password 3..72 chars
    - UserResponse has no password field; the password is write-only
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreate(BaseModel):
    """User creation payload."""
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=3, max_length=72)

    @field_validator("username", "email")
    @classmethod
    def strip_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def check_email_shape(cls, v: str) -> str:
        local, sep, domain = v.rpartition("@")
        if not sep or not local or not domain:
            raise ValueError("must be an email address")
        return v


class UserResponse(BaseModel):
    """Public view of a persisted user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime
