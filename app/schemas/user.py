# app/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, EmailStr, ConfigDict, Field, field_validator
from sqlmodel import SQLModel

# App-level roles. Self-registered rows are always "user".
Role = Literal["user", "admin"]


class UserCreate(BaseModel):
    """
    Payload of the public sign-up form.

    - `fullName` (form field) takes precedence over `name`.
    - Extra fields sent by the form (phone, address, ...) are ignored.
    - Blank strings count as missing.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    full_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("fullName", "full_name"),
    )
    name: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("full_name", "name", "email", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return v

    @field_validator("password", mode="before")
    @classmethod
    def empty_password_to_none(cls, v):
        if isinstance(v, str) and not v:
            return None
        return v

    @property
    def display_name(self) -> str | None:
        return self.full_name or self.name


class UserRead(SQLModel):
    """Response schema returned to clients (never includes the password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime
