# app/services/user_service.py
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.passwords import hash_password
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserCreate


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - enforce app rules (required fields, unique email)
      - hash passwords before they reach the repository
      - map domain errors to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def _duplicate_email(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )

    def register(self, session: Session, payload: UserCreate) -> User:
        """
        Self-registration from the public sign-up form.

        Rules:
          - name (fullName or name), email and password are required
          - email must not be registered yet (409 otherwise)
          - new rows always get role "user"
        """
        name = payload.display_name
        if not name or not payload.email or not payload.password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name, email and password are required",
            )

        email = str(payload.email)
        if self.repo.get_by_email(session, email) is not None:
            raise self._duplicate_email()

        user = User(
            name=name,
            email=email,
            password=hash_password(payload.password),
            role="user",
        )
        try:
            return self.repo.create(session, user)
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email
            session.rollback()
            raise self._duplicate_email()

    def list_users(self, session: Session) -> list[User]:
        """List users, newest first (admin only)."""
        return self.repo.list_all(session)
