from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.dependencies import get_current_user, get_db
from splitledger.schemas.user import UserCreate, UserOut
from splitledger.services.user_service import create_user


router = APIRouter()


@router.post("/", response_model=UserOut, status_code=201)
async def register(data: UserCreate, db: AsyncSession = Depends(get_db)):
    return await create_user(db, data)


@router.get("/me", response_model=UserOut)
async def get_user(user = Depends(get_current_user)):
    return user
