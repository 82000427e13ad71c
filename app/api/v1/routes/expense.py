from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.schemas.expense import ExpenseCreate, ExpenseOut
from app.services.expense_services import create_expense, get_expenses_by_group
from app.core.dependencies import get_acting_member

router = APIRouter()

@router.post("/{group_id}/add", response_model=ExpenseOut, status_code=201)
async def add_expense(group_id: int, data: ExpenseCreate, db: AsyncSession = Depends(get_db), member: str = Depends(get_acting_member)):
    return await create_expense(db, data, group_id, member)

@router.get("/{group_id}/all", response_model=list[ExpenseOut])
async def all_expenses(group_id: int, db: AsyncSession = Depends(get_db), member: str = Depends(get_acting_member)):
    return await get_expenses_by_group(db, group_id, member)
