# app/schemas/auth.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class LoginRequest(SQLModel):
    """
    Admin login form. Both fields are checked by the service so that a
    missing value yields the same 400 message as an empty one.
    """

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    password: str | None = None


class AdminRead(SQLModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class LoginResponse(SQLModel):
    message: str
    token: str
    admin: AdminRead
