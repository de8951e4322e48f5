"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging
import re

from sqlalchemy import select

from app.core.config import get_settings
from app.db.session import get_sessionmaker
from app.models import Business, User, UserRole, UserStatus
from app.schemas.user import UserCreate
from app.services.user_service import create_user

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "business"


async def ensure_default_admin() -> None:
    """Create the configured owner account if one does not yet exist."""

    settings = get_settings()
    email = settings.bootstrap_admin_email
    password = settings.bootstrap_admin_password
    if not email or not password:
        return

    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        existing = await session.execute(select(User).where(User.email == email.lower()))
        if existing.scalar_one_or_none() is not None:
            return

        business_result = await session.execute(
            select(Business).order_by(Business.created_at.asc()).limit(1)
        )
        business = business_result.scalar_one_or_none()
        if business is None:
            business = Business(
                name=settings.bootstrap_business_name,
                slug=_slugify(settings.bootstrap_business_name),
            )
            session.add(business)
            await session.commit()
            await session.refresh(business)

        payload = UserCreate(
            business_id=business.id,
            email=email,
            password=password,
            first_name="Admin",
            last_name="User",
            role=UserRole.OWNER,
            status=UserStatus.ACTIVE,
        )
        await create_user(session, payload)
        logger.info("Created bootstrap owner for business %s", business.id)
