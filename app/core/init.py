"""
Application initialization module
Handles initial setup tasks like creating the default reviewer account
"""

import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.hasher import PasswordHelper
from app.models.user import User

logger = logging.getLogger(__name__)


def init_reviewer(db: Session) -> None:
    """
    Create a reviewer account from settings if one is configured and missing.

    Args:
        db: Database session
    """
    if not settings.reviewer_default_email or not settings.reviewer_default_password:
        logger.info("No default reviewer configured, skipping")
        return

    email = settings.reviewer_default_email.lower()

    try:
        existing = db.query(User).filter(User.email == email).first()

        if existing:
            if not existing.is_reviewer:
                existing.is_reviewer = True
                db.commit()
                logger.info(f"Granted reviewer access to existing user {existing.id}")
            else:
                logger.info(f"Reviewer account already exists (ID: {existing.id})")
            return

        reviewer = User(
            name=settings.reviewer_default_name,
            email=email,
            hashed_password=PasswordHelper.hash_password(
                settings.reviewer_default_password
            ),
            is_reviewer=True,
        )

        db.add(reviewer)
        db.commit()
        db.refresh(reviewer)

        logger.info(f"Reviewer account created: {email} (ID: {reviewer.id})")
        logger.warning("Change the default reviewer password immediately!")

    except Exception as e:
        logger.error(f"Failed to initialize reviewer account: {e}")
        db.rollback()
        raise


def initialize_application(db: Session) -> None:
    """
    Run all application initialization tasks.

    Args:
        db: Database session
    """
    logger.info("Starting application initialization...")

    init_reviewer(db)

    logger.info("Application initialization completed")
