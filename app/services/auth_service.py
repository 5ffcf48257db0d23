# app/services/auth_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.auth import create_access_token
from app.core.passwords import verify_password
from app.repositories.admin_repo import AdminRepository
from app.schemas.auth import AdminRead, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)


class AuthService:
    """
    Admin login.

    Admin passwords are stored as bcrypt hashes (same scheme as users) and
    checked with bcrypt; a successful login yields a 1-day token whose
    role claim is always "admin".
    """

    def __init__(self, repo: AdminRepository):
        self.repo = repo

    def login(self, session: Session, payload: LoginRequest) -> LoginResponse:
        if not payload.email or not payload.password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email and password are required",
            )

        admin = self.repo.get_by_email(session, payload.email)
        if admin is None or not verify_password(payload.password, admin.password):
            logger.info("Failed admin login for %s", payload.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        token = create_access_token(
            subject_id=admin.id,
            email=admin.email,
            role="admin",
        )
        return LoginResponse(
            message="Admin login successful",
            token=token,
            admin=AdminRead.model_validate(admin),
        )
