# create_admin.py
import argparse
import getpass

from sqlmodel import Session

from app.core.passwords import hash_password
from app.database import create_db_and_tables, engine
from app.models.user import Admin
from app.repositories.admin_repo import AdminRepository


def main():
    parser = argparse.ArgumentParser(description="Provision an admin account.")
    parser.add_argument("email")
    parser.add_argument("--name", default="Admin")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password cannot be empty.")

    create_db_and_tables()
    repo = AdminRepository()

    with Session(engine) as session:
        if repo.get_by_email(session, args.email) is not None:
            raise SystemExit(f"Admin {args.email} already exists.")

        admin = repo.create(
            session,
            Admin(name=args.name, email=args.email, password=hash_password(password)),
        )

    print(f"Created admin #{admin.id} <{admin.email}>")


if __name__ == "__main__":
    main()
