from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.dependencies import get_db, get_current_user, check_group_membership
from splitledger.schemas.settlement import SettlementCreate, SettlementOut
from splitledger.services.settlement_service import create_settlement, delete_settlement, get_settlement

router = APIRouter()

@router.post("/", response_model=SettlementOut, status_code=201)
async def add_settlement(
    data: SettlementCreate,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    await check_group_membership(db, data.group_id, user.id)
    return await create_settlement(db, data)

@router.delete("/{settlement_id}")
async def undo_settlement(
    settlement_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    settlement = await get_settlement(db, settlement_id)
    if not settlement:
        raise HTTPException(404, "Settlement entry not found")

    # Only the user who made the payment can undo it
    if settlement.from_user != user.id:
        raise HTTPException(403, "You are not allowed to undo this settlement")

    await check_group_membership(db, settlement.group_id, user.id)
    await delete_settlement(db, settlement_id)
    return {"status": "undo successful"}
