from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.core.dependencies import get_acting_member
from app.schemas.balances import GroupBalanceOut
from app.schemas.settlements import PaymentCreate, PaymentOut
from app.services.settlement_service import add_payment, compute_group_settlements, get_payment_history

router = APIRouter()


@router.get("/{group_id}", response_model=GroupBalanceOut)
async def get_settlements(
    group_id: int,
    db: AsyncSession = Depends(get_db),
    member: str = Depends(get_acting_member),
):
    return await compute_group_settlements(db, group_id, member)


@router.post("/{group_id}/pay", response_model=PaymentOut, status_code=201)
async def pay(
    group_id: int,
    data: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    member: str = Depends(get_acting_member),
):
    return await add_payment(db, group_id, member, data)


@router.get("/{group_id}/history", response_model=list[PaymentOut])
async def history(
    group_id: int,
    db: AsyncSession = Depends(get_db),
    member: str = Depends(get_acting_member),
):
    return await get_payment_history(db, group_id, member)
