"""Read queries over a group's expenses and settlements.

Everything here aggregates in SQL and returns plain values; the balance and
debt computations in :mod:`splitledger.services.balance_service` are pure
functions over what these queries return.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.core.money import ZERO, to_money
from splitledger.models.expense import Expense
from splitledger.models.expense_participant import ExpenseParticipant
from splitledger.models.settlement import Settlement
from splitledger.services.user_queries import get_user_names


@dataclass
class LedgerTotals:
    """Money movements of one user within one group."""
    user_id: int
    user_name: str
    paid: Decimal = ZERO
    owed: Decimal = ZERO
    settled_out: Decimal = ZERO
    settled_in: Decimal = ZERO


async def _sum_by_user(db: AsyncSession, q) -> Dict[int, Decimal]:
    res = await db.execute(q)
    return {row.user_id: to_money(row.total) for row in res}


async def fetch_group_totals(
    db: AsyncSession,
    group_id: int,
) -> Dict[int, LedgerTotals]:
    """
    Returns:
        {
            user_id: LedgerTotals
        }

    for every user who paid, participated in, or was party to a settlement
    in the group. An unknown group yields an empty dict.
    """

    # Total paid by each user
    paid_q = (
        select(
            Expense.paid_by.label("user_id"),
            func.coalesce(func.sum(Expense.amount), 0).label("total"),
        )
        .where(Expense.group_id == group_id)
        .group_by(Expense.paid_by)
    )

    # Total share owed by each participant
    owed_q = (
        select(
            ExpenseParticipant.user_id.label("user_id"),
            func.coalesce(func.sum(ExpenseParticipant.share_amount), 0).label("total"),
        )
        .join(Expense, Expense.id == ExpenseParticipant.expense_id)
        .where(Expense.group_id == group_id)
        .group_by(ExpenseParticipant.user_id)
    )

    # Settlements paid out and received
    out_q = (
        select(
            Settlement.from_user.label("user_id"),
            func.coalesce(func.sum(Settlement.amount), 0).label("total"),
        )
        .where(Settlement.group_id == group_id)
        .group_by(Settlement.from_user)
    )

    in_q = (
        select(
            Settlement.to_user.label("user_id"),
            func.coalesce(func.sum(Settlement.amount), 0).label("total"),
        )
        .where(Settlement.group_id == group_id)
        .group_by(Settlement.to_user)
    )

    paid_map = await _sum_by_user(db, paid_q)
    owed_map = await _sum_by_user(db, owed_q)
    out_map = await _sum_by_user(db, out_q)
    in_map = await _sum_by_user(db, in_q)

    # Union of all users involved
    user_ids = set(paid_map) | set(owed_map) | set(out_map) | set(in_map)
    if not user_ids:
        return {}

    names = await get_user_names(db, user_ids)

    return {
        uid: LedgerTotals(
            user_id=uid,
            user_name=names.get(uid, ""),
            paid=paid_map.get(uid, ZERO),
            owed=owed_map.get(uid, ZERO),
            settled_out=out_map.get(uid, ZERO),
            settled_in=in_map.get(uid, ZERO),
        )
        for uid in user_ids
    }
