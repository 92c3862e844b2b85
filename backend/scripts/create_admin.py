#!/usr/bin/env python3
"""Create (or promote) a portal admin account."""

import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from app import models  # noqa: E402, F401
from app.core.logging import get_logger, setup_logging  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.session import SessionLocal  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402

logger = get_logger(__name__)


def create_admin_user(
    email: str = "admin@example.com",
    password: str = "Admin123!",
    name: str = "Admin User",
    phone: str = "0000000000",
) -> User:
    """Create an admin user, or promote an existing account with that email."""
    email = email.lower().strip()
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        if user is not None and user.role == UserRole.ADMIN.value:
            logger.info(f"Admin user already exists: {email}")
            return user

        if user is not None:
            user.role = UserRole.ADMIN.value
            user.insurance_provider_id = None
            user.password_hash = hash_password(password)
            user.is_active = True
            logger.info(f"Promoted {email} to admin")
        else:
            user = User(
                name=name,
                email=email,
                phone=phone,
                password_hash=hash_password(password),
                role=UserRole.ADMIN.value,
                is_active=True,
            )
            db.add(user)
            logger.info(f"Created admin user: {email}")

        db.commit()
        return user
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating admin user: {e}", exc_info=True)
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create an admin user for the insurance portal")
    parser.add_argument("--email", default="admin@example.com", help="Admin email")
    parser.add_argument("--password", default="Admin123!", help="Admin password")
    parser.add_argument("--name", default="Admin User", help="Admin display name")
    parser.add_argument("--phone", default="0000000000", help="Admin phone number")
    args = parser.parse_args()

    setup_logging()
    try:
        create_admin_user(email=args.email, password=args.password, name=args.name, phone=args.phone)
    except SQLAlchemyError:
        sys.exit(1)
