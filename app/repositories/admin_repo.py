# app/repositories/admin_repo.py
from sqlmodel import Session, select

from app.models.user import Admin


class AdminRepository:
    """
    Data access layer for Admin.

    Admins are provisioned out of band (create_admin.py); the API only reads.
    """

    def get_by_email(self, session: Session, email: str) -> Admin | None:
        """Exact-match lookup by email."""
        stmt = select(Admin).where(Admin.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, admin: Admin) -> Admin:
        session.add(admin)
        session.commit()
        session.refresh(admin)
        return admin
