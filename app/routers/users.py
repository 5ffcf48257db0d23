# app/routers/users.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserRead, UserCreate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


# -------- Public --------


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    payload: UserCreate,
    session: Session = Depends(get_session),
):
    """
    Register a customer from the public sign-up form.

    - Accepts `fullName` or `name`.
    - 409 if the email is already registered.
    - The password is stored hashed and never returned.
    """
    return service.register(session, payload)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(session: Session = Depends(get_session)):
    """
    List all registered users, newest first (admin only).
    """
    return service.list_users(session)
