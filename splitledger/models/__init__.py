from splitledger.models.user import User
from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember
from splitledger.models.expense import Expense
from splitledger.models.expense_participant import ExpenseParticipant
from splitledger.models.settlement import Settlement

__all__ = [
    "User",
    "Group",
    "GroupMember",
    "Expense",
    "ExpenseParticipant",
    "Settlement",
]
