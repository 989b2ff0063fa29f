from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.dependencies import get_db, get_current_user, require_group_admin, require_group_member, require_member_or_empty_group
from splitledger.schemas.balances import GroupBalances, GroupDebts
from splitledger.schemas.expense import ExpenseOut
from splitledger.schemas.group import GroupCreate, GroupMemberCreate, GroupMemberOut, GroupOut, GroupUpdate
from splitledger.schemas.settlement import SettlementOut
from splitledger.services.balance_service import get_group_balances, get_group_debts
from splitledger.services.expense_services import get_group_expenses
from splitledger.services.group_queries import get_group
from splitledger.services.group_services import (
    create_group,
    update_group,
    add_member,
    remove_member,
    get_group_members,
    list_groups_for_user,
)
from splitledger.services.settlement_service import get_group_settlements

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(
    data: GroupCreate,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user)
):
    return await create_group(db, data, user.id)

@router.get("/my-groups", response_model=list[GroupOut])
async def my_groups(db: AsyncSession = Depends(get_db), user = Depends(get_current_user)):
    return await list_groups_for_user(db, user.id)

@router.get("/{group_id}", response_model=GroupOut)
async def fetch_group(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(require_group_member)):
    return await get_group(db, group_id)

@router.patch("/{group_id}", response_model=GroupOut)
async def edit_group(
    group_id: int,
    data: GroupUpdate,
    db: AsyncSession = Depends(get_db),
    user = Depends(require_group_member),
):
    group = await update_group(db, group_id, data)
    if group is None:
        raise HTTPException(404, "Group does not exist")
    return group

@router.get("/{group_id}/members", response_model=list[GroupMemberOut])
async def members(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(require_group_member)):
    return await get_group_members(db, group_id)

@router.post("/{group_id}/members", response_model=GroupMemberOut, status_code=201)
async def add_user_to_group(
    group_id: int,
    data: GroupMemberCreate,
    db: AsyncSession = Depends(get_db),
    user = Depends(require_group_admin),
):
    return await add_member(db, group_id, data)

@router.delete("/{group_id}/members/{user_id}")
async def remove_user_from_group(
    group_id: int,
    user_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(require_group_admin),
):
    if not await remove_member(db, group_id, user_id):
        raise HTTPException(404, "Member not found")
    return {"status": "removed"}

@router.get("/{group_id}/expenses", response_model=list[ExpenseOut])
async def group_expenses(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(require_group_member)):
    return await get_group_expenses(db, group_id)

@router.get("/{group_id}/settlements", response_model=list[SettlementOut])
async def group_settlements(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(require_group_member)):
    return await get_group_settlements(db, group_id)

@router.get("/{group_id}/balances", response_model=GroupBalances)
async def balances(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(require_member_or_empty_group)):
    return await get_group_balances(db, group_id)

@router.get("/{group_id}/debts", response_model=GroupDebts)
async def debts(group_id: int, db: AsyncSession = Depends(get_db), user = Depends(require_member_or_empty_group)):
    return await get_group_debts(db, group_id)
