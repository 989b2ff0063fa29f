from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal

class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None

class GroupUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None

class GroupOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_by: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class GroupMemberCreate(BaseModel):
    user_id: int
    role: Literal["admin", "member"] = "member"

class GroupMemberOut(BaseModel):
    id: int
    user_id: int
    group_id: int
    role: str
    joined_at: datetime | None = None

    class Config:
        from_attributes = True
