import logging
from decimal import Decimal
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.core.exceptions import NotFoundError, ValidationError
from splitledger.core.money import EPSILON, ZERO, qround
from splitledger.models.expense import Expense
from splitledger.models.expense_participant import ExpenseParticipant
from splitledger.schemas.expense import ExpenseCreate, ExpenseUpdate, ParticipantInput
from splitledger.services.group_queries import get_group, get_membership, member_user_ids

logger = logging.getLogger(__name__)


def reconcile_shares(amount: Decimal, shares: Sequence[Decimal]) -> List[Decimal]:
    """
    Check that ``shares`` add up to ``amount`` and return them so they sum
    exactly.

    A difference of at most EPSILON is accepted and folded into the largest
    share (the first one on ties), so stored shares always add up to the
    stored amount.
    """
    amount = qround(amount)
    shares = [qround(s) for s in shares]
    total = sum(shares, ZERO)
    diff = amount - total

    if abs(diff) > EPSILON:
        raise ValidationError(
            f"Sum of participant shares ({total}) does not equal total amount ({amount})"
        )

    if diff:
        idx = max(range(len(shares)), key=lambda k: (shares[k], -k))
        shares[idx] += diff
        if shares[idx] <= ZERO:
            raise ValidationError("Share amounts must be positive")

    return shares


async def _validate_participants(
    db: AsyncSession,
    group_id: int,
    amount: Decimal,
    participants: List[ParticipantInput],
) -> List[Decimal]:
    if not participants:
        raise ValidationError("An expense needs at least one participant")

    user_ids = [p.user_id for p in participants]

    if len(user_ids) != len(set(user_ids)):
        raise ValidationError("Duplicate users found in participants")

    valid_ids = await member_user_ids(db, group_id, user_ids)
    missing = [uid for uid in user_ids if uid not in valid_ids]

    if missing:
        raise ValidationError(
            f"Participants are not members of the group: {', '.join(map(str, missing))}"
        )

    return reconcile_shares(amount, [p.share_amount for p in participants])


async def create_expense(db: AsyncSession, data: ExpenseCreate):
    try:
        if not await get_group(db, data.group_id):
            raise NotFoundError(f"Group with id {data.group_id} not found")

        if not await get_membership(db, data.group_id, data.paid_by):
            raise ValidationError("Payer is not a member of the group")

        shares = await _validate_participants(db, data.group_id, data.amount, data.participants)
    except ValidationError as e:
        logger.warning("Rejected expense for group %s: %s", data.group_id, e)
        raise

    expense = Expense(
        group_id=data.group_id,
        paid_by=data.paid_by,
        amount=qround(data.amount),
        description=data.description,
        participants=[
            ExpenseParticipant(user_id=p.user_id, share_amount=share)
            for p, share in zip(data.participants, shares)
        ],
    )

    # expense row and participant rows commit as one unit
    db.add(expense)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(expense)
    logger.info("Created expense %s in group %s", expense.id, expense.group_id)
    return expense


async def get_expense(db: AsyncSession, expense_id: int):
    res = await db.execute(select(Expense).where(Expense.id == expense_id))
    return res.scalar_one_or_none()


async def get_group_expenses(db: AsyncSession, group_id: int):
    q = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at, Expense.id)
    )
    res = await db.execute(q)
    return res.scalars().all()


async def update_expense(db: AsyncSession, expense_id: int, data: ExpenseUpdate):
    expense = await get_expense(db, expense_id)

    if not expense:
        return None

    changes = data.model_dump(exclude_unset=True)
    if not changes:
        return expense

    amount = data.amount if data.amount is not None else expense.amount

    shares = None
    try:
        if data.participants is not None:
            shares = await _validate_participants(db, expense.group_id, amount, data.participants)
        elif data.amount is not None:
            shares = reconcile_shares(amount, [p.share_amount for p in expense.participants])
    except ValidationError as e:
        logger.warning("Rejected update of expense %s: %s", expense_id, e)
        raise

    if data.participants is not None:
        expense.participants = [
            ExpenseParticipant(user_id=p.user_id, share_amount=share)
            for p, share in zip(data.participants, shares)
        ]
    elif shares is not None:
        for p, share in zip(expense.participants, shares):
            p.share_amount = share

    expense.amount = qround(amount)
    if data.description is not None:
        expense.description = data.description

    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(expense)
    logger.info("Updated expense %s", expense_id)
    return expense


async def delete_expense(db: AsyncSession, expense_id: int) -> bool:
    expense = await get_expense(db, expense_id)

    if not expense:
        return False

    # participants go with it via the relationship cascade
    await db.delete(expense)
    await db.commit()
    logger.info("Deleted expense %s", expense_id)
    return True
