import logging
from decimal import Decimal
from typing import List, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.schemas.balances import GroupBalances, GroupDebts, UserBalance
from splitledger.services.debt_service import simplify_debts
from splitledger.services.ledger_store import LedgerTotals, fetch_group_totals

logger = logging.getLogger(__name__)


def net_balance(totals: LedgerTotals) -> Decimal:
    # A settlement moves the payer toward zero and the receiver toward zero.
    return totals.paid - totals.owed + totals.settled_out - totals.settled_in


def compute_balances(totals: Mapping[int, LedgerTotals]) -> List[UserBalance]:
    """One balance per user, ordered by user id. Sums to zero for valid ledgers."""
    return [
        UserBalance(
            user_id=t.user_id,
            user_name=t.user_name,
            balance=net_balance(t),
        )
        for _, t in sorted(totals.items())
    ]


async def get_group_balances(db: AsyncSession, group_id: int) -> GroupBalances:
    totals = await fetch_group_totals(db, group_id)
    balances = compute_balances(totals)
    logger.debug("Computed %d balances for group %s", len(balances), group_id)
    return GroupBalances(group_id=group_id, balances=balances)


async def get_group_debts(db: AsyncSession, group_id: int) -> GroupDebts:
    result = await get_group_balances(db, group_id)
    debts = simplify_debts(result.balances)
    logger.debug("Suggested %d payments for group %s", len(debts), group_id)
    return GroupDebts(group_id=group_id, debts=debts)
