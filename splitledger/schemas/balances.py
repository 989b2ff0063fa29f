from pydantic import BaseModel
from decimal import Decimal

class UserBalance(BaseModel):
    """Net position of one user in a group. Positive means the user is owed money."""
    user_id: int
    user_name: str
    balance: Decimal

class GroupBalances(BaseModel):
    group_id: int
    balances: list[UserBalance]

class Debt(BaseModel):
    """A suggested payment from a debtor to a creditor."""
    from_user: int
    from_user_name: str
    to_user: int
    to_user_name: str
    amount: Decimal

class GroupDebts(BaseModel):
    group_id: int
    debts: list[Debt]
