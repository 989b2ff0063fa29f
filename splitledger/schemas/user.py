from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

class UserBase(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1)

class UserCreate(UserBase):
    pass

class UserOut(UserBase):
    id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True
