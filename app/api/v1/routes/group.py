from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.services.group_services import create_group, delete_group, list_group_for_member
from app.services.settlement_service import get_group_detail
from app.schemas.group import GroupCreate, GroupDetailOut, GroupOut
from app.core.dependencies import get_acting_member

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(
    data: GroupCreate,
    db: AsyncSession = Depends(get_db),
    member: str = Depends(get_acting_member)
):
    return await create_group(db, data, member)

@router.get("/my-groups", response_model=list[GroupOut])
async def my_groups(db: AsyncSession = Depends(get_db), member: str = Depends(get_acting_member)):
    return await list_group_for_member(db, member)

@router.get("/{group_id}", response_model=GroupDetailOut)
async def group_detail(group_id: int, db: AsyncSession = Depends(get_db), member: str = Depends(get_acting_member)):
    return await get_group_detail(db, group_id, member)

@router.delete("/{group_id}")
async def remove_group(group_id: int, db: AsyncSession = Depends(get_db), member: str = Depends(get_acting_member)):
    return await delete_group(db, group_id, member)
