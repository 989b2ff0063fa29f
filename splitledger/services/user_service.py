import logging

from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.core.exceptions import ValidationError
from splitledger.models.user import User
from splitledger.schemas.user import UserCreate
from splitledger.services.user_queries import get_user_by_email

logger = logging.getLogger(__name__)

async def create_user(db: AsyncSession, data: UserCreate):
    existing = await get_user_by_email(db, data.email)
    if existing:
        raise ValidationError("User with this email already exists")

    user = User(
        email=data.email,
        name=data.name,
    )

    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Created user %s", user.id)
    return user
