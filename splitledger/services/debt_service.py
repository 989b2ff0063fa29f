from typing import Iterable, List

from splitledger.core.money import EPSILON, ZERO, qround
from splitledger.schemas.balances import Debt, UserBalance


def _draw_reserve(main, reserve, surplus):
    """Move reserve entries into ``main`` until ``surplus`` is within EPSILON."""
    for entry in reserve:
        if surplus <= EPSILON:
            break
        main.append(entry)
        surplus -= entry[2]


def simplify_debts(balances: Iterable[UserBalance]) -> List[Debt]:
    """
    Greedy two-pointer matching of debtors to creditors.

    Creditors are walked from the largest credit down, debtors from the
    largest debt down; equal balances are ordered by user id. Each step pays
    the smaller of the two remaining amounts and moves past whichever side
    reached zero. This keeps the result at most ``len(non_zero) - 1``
    payments, but it is not guaranteed to be the global minimum.

    Balances within EPSILON of zero are treated as settled and left out,
    unless leaving them out would make the two sides differ by more than
    EPSILON. In that case just enough of them are brought back, on the short
    side, to cover the difference.

    Remainders are carried at full precision; only emitted amounts are
    rounded to cents, and payments that round to zero are dropped.
    """
    creditors = []
    debtors = []
    small_creditors = []
    small_debtors = []

    for b in balances:
        bal = b.balance
        if bal > EPSILON:
            creditors.append([b.user_id, b.user_name, bal])
        elif bal < -EPSILON:
            debtors.append([b.user_id, b.user_name, -bal])
        elif bal > ZERO:
            small_creditors.append([b.user_id, b.user_name, bal])
        elif bal < ZERO:
            small_debtors.append([b.user_id, b.user_name, -bal])

    for side in (creditors, debtors, small_creditors, small_debtors):
        side.sort(key=lambda e: (-e[2], e[0]))

    credit = sum((c[2] for c in creditors), ZERO)
    debit = sum((d[2] for d in debtors), ZERO)

    if credit - debit > EPSILON:
        _draw_reserve(debtors, small_debtors, credit - debit)
    elif debit - credit > EPSILON:
        _draw_reserve(creditors, small_creditors, debit - credit)

    debts: List[Debt] = []
    i = 0
    j = 0

    while i < len(creditors) and j < len(debtors):
        cred = creditors[i]
        debt = debtors[j]

        amount = min(cred[2], debt[2])
        rounded = qround(amount)

        if rounded > ZERO:
            debts.append(Debt(
                from_user=debt[0],
                from_user_name=debt[1],
                to_user=cred[0],
                to_user_name=cred[1],
                amount=rounded,
            ))

        cred[2] -= amount
        debt[2] -= amount

        # min() leaves at least one side at exactly zero
        if cred[2] <= ZERO:
            i += 1
        if debt[2] <= ZERO:
            j += 1

    return debts
