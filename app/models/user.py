# app/models/user.py
from datetime import datetime

from sqlmodel import SQLModel, Field

from app.models.product import utc_now


class User(SQLModel, table=True):
    """
    Customer who registered through the public sign-up form.

    Role:
      - always "user" for self-registered rows
      - rows are never updated or deleted by the API

    The password column stores a bcrypt hash, never the raw password.
    """

    __tablename__ = "users"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        max_length=200,
        description="Full name as entered on the sign-up form",
    )

    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
    )

    password: str = Field(
        description="bcrypt hash",
    )

    role: str = Field(
        default="user",
        index=True,
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        index=True,
        description="Creation timestamp (UTC)",
    )


class Admin(SQLModel, table=True):
    """
    Pre-provisioned administrator account (see create_admin.py).

    Kept in its own table, separate from self-registered users.
    """

    __tablename__ = "admins"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(max_length=200)

    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
    )

    password: str = Field(
        description="bcrypt hash",
    )

    role: str = Field(default="admin")

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Creation timestamp (UTC)",
    )
