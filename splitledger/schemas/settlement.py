from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal

class SettlementCreate(BaseModel):
    group_id: int
    from_user: int
    to_user: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    description: str | None = None

class SettlementOut(BaseModel):
    id: int
    group_id: int
    from_user: int
    to_user: int
    amount: Decimal
    description: str | None = None
    settled_at: datetime | None = None

    class Config:
        from_attributes = True
