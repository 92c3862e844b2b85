"""Seed demo accounts for development."""

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import hash_password
from app.db.session import SessionLocal
from app.models.provider import InsuranceProvider
from app.models.user import User, UserRole

logger = get_logger(__name__)

DEMO_PROVIDER_ID = "demo-health"

# email, password, name, role, bound to demo provider
DEMO_ACCOUNTS = (
    ("admin@example.com", "Admin123!", "Admin User", UserRole.ADMIN, False),
    ("agent@example.com", "Agent123!", "Agent User", UserRole.AGENT, True),
    ("user@example.com", "User123!", "Portal User", UserRole.USER, False),
)


def seed_demo_accounts() -> None:
    """Seed a demo provider plus one account per role (dev only, opt-in)."""
    if settings.ENV != "dev" or not settings.SEED_DEMO_ACCOUNTS:
        logger.info("Demo account seeding skipped (ENV != dev or SEED_DEMO_ACCOUNTS=false)")
        return

    db = SessionLocal()
    try:
        if not db.get(InsuranceProvider, DEMO_PROVIDER_ID):
            db.add(
                InsuranceProvider(
                    id=DEMO_PROVIDER_ID,
                    name="Demo Health Insurance",
                    description="Provider created for local development",
                    is_active=True,
                )
            )
            db.flush()
            logger.info(f"Created demo provider: {DEMO_PROVIDER_ID}")

        for email, password, name, role, bound in DEMO_ACCOUNTS:
            if db.query(User).filter(User.email == email).first():
                continue
            db.add(
                User(
                    name=name,
                    email=email,
                    phone="0000000000",
                    password_hash=hash_password(password),
                    role=role.value,
                    insurance_provider_id=DEMO_PROVIDER_ID if bound else None,
                    is_active=True,
                )
            )
            logger.info(f"Created demo {role.value} account: {email} / {password}")

        db.commit()
        logger.info("Demo accounts seeded successfully")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error seeding demo accounts: {e}", exc_info=True)
        raise
    finally:
        db.close()
