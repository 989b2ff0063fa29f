from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List

class ParticipantInput(BaseModel):
    user_id: int
    share_amount: Decimal = Field(gt=0, decimal_places=2)

class ExpenseCreate(BaseModel):
    group_id: int
    paid_by: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    description: str = Field(min_length=1)
    participants: List[ParticipantInput]

class ExpenseUpdate(BaseModel):
    description: str | None = Field(default=None, min_length=1)
    amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    participants: List[ParticipantInput] | None = None

class ParticipantOut(BaseModel):
    user_id: int
    share_amount: Decimal

    class Config:
        from_attributes = True

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    paid_by: int
    amount: Decimal
    description: str
    created_at: datetime | None = None
    participants: List[ParticipantOut] = []

    class Config:
        from_attributes = True
