from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.dependencies import get_db, get_current_user, check_group_membership
from splitledger.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate
from splitledger.services.expense_services import create_expense, delete_expense, get_expense, update_expense

router = APIRouter()

async def _expense_for_member(db: AsyncSession, expense_id: int, user_id: int):
    expense = await get_expense(db, expense_id)
    if not expense:
        raise HTTPException(404, "Expense not found")
    await check_group_membership(db, expense.group_id, user_id)
    return expense

@router.post("/", response_model=ExpenseOut, status_code=201)
async def add_expense(data: ExpenseCreate, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    await check_group_membership(db, data.group_id, current_user.id)
    return await create_expense(db, data)

@router.get("/{expense_id}", response_model=ExpenseOut)
async def fetch(expense_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    return await _expense_for_member(db, expense_id, current_user.id)

@router.patch("/{expense_id}", response_model=ExpenseOut)
async def edit(
    expense_id: int,
    data: ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    current_user = Depends(get_current_user),
):
    await _expense_for_member(db, expense_id, current_user.id)
    return await update_expense(db, expense_id, data)

@router.delete("/{expense_id}")
async def del_expense(expense_id: int, db: AsyncSession = Depends(get_db), current_user = Depends(get_current_user)):
    await _expense_for_member(db, expense_id, current_user.id)
    await delete_expense(db, expense_id)
    return {"status": "deleted"}
