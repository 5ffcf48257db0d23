# app/routers/auth.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.admin_repo import AdminRepository
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = AdminRepository()
service = AuthService(repo)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Admin login.

    Returns a bearer token (valid for 1 day) plus the admin profile.
    Send it as `Authorization: Bearer <token>` on admin endpoints.
    """
    return service.login(session, payload)
