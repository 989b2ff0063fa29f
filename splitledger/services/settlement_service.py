import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from splitledger.core.exceptions import NotFoundError, ValidationError
from splitledger.core.money import qround
from splitledger.models.settlement import Settlement
from splitledger.schemas.settlement import SettlementCreate
from splitledger.services.group_queries import get_group, get_membership

logger = logging.getLogger(__name__)

async def create_settlement(db: AsyncSession, data: SettlementCreate):
    try:
        if not await get_group(db, data.group_id):
            raise NotFoundError(f"Group with id {data.group_id} not found")

        if data.from_user == data.to_user:
            raise ValidationError("Cannot settle debt with yourself")

        if not await get_membership(db, data.group_id, data.from_user):
            raise ValidationError("Payer is not a member of this group")

        if not await get_membership(db, data.group_id, data.to_user):
            raise ValidationError("Receiver is not a member of this group")
    except ValidationError as e:
        logger.warning("Rejected settlement for group %s: %s", data.group_id, e)
        raise

    # No check against outstanding debt: overpayments simply shift balances.
    settlement = Settlement(
        group_id=data.group_id,
        from_user=data.from_user,
        to_user=data.to_user,
        amount=qround(data.amount),
        description=data.description
    )

    db.add(settlement)
    await db.commit()
    await db.refresh(settlement)
    logger.info(
        "Recorded settlement %s: %s -> %s in group %s",
        settlement.id, data.from_user, data.to_user, data.group_id,
    )

    return settlement

async def get_settlement(db: AsyncSession, settlement_id: int):
    q = select(Settlement).where(Settlement.id == settlement_id)
    result = await db.execute(q)
    return result.scalar_one_or_none()

async def get_group_settlements(db: AsyncSession, group_id: int):
    q = select(Settlement).where(
        Settlement.group_id == group_id
    ).order_by(Settlement.settled_at, Settlement.id)

    result = await db.execute(q)
    return result.scalars().all()

async def delete_settlement(db: AsyncSession, settlement_id: int) -> bool:
    settlement = await get_settlement(db, settlement_id)

    if not settlement:
        return False

    await db.delete(settlement)
    await db.commit()
    logger.info("Undid settlement %s", settlement_id)
    return True
