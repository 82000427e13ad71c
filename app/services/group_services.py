import logging
from typing import List, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from app.core.exceptions import GroupNotFoundError, LedgerValidationError, NotGroupMemberError, PermissionDeniedError
from app.models.group import Group
from app.models.group_member import GroupMember
from app.schemas.group import GroupCreate, GroupOut

logger = logging.getLogger("splitledger.groups")


def ensure_group_member(members: Sequence[str], member: str):
    if member not in members:
        raise NotGroupMemberError(member)


def group_to_out(group: Group) -> GroupOut:
    return GroupOut(
        id=group.id,
        name=group.name,
        created_by=group.created_by,
        created_at=group.created_at,
        member_emails=[m.email for m in group.members],
    )


async def get_active_group(db: AsyncSession, group_id: int) -> Group:
    q = select(Group).where(Group.id == group_id, Group.is_deleted == False)
    group = (await db.execute(q)).scalar_one_or_none()

    if not group:
        raise GroupNotFoundError(group_id)

    return group


async def get_member_emails(db: AsyncSession, group_id: int) -> List[str]:
    q = (
        select(GroupMember.email)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.position)
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def create_group(db: AsyncSession, data: GroupCreate, creator: str) -> GroupOut:
    # creator always comes first, like the original create form
    emails = [creator] + [e for e in data.member_emails if e != creator]

    if len(emails) != len(set(emails)):
        raise LedgerValidationError("Duplicate member emails", field="member_emails")

    name = data.name.strip()
    if not name:
        raise LedgerValidationError("Enter a group name.", field="name")

    group = Group(name=name, created_by=creator)
    db.add(group)
    await db.flush()

    db.add_all([
        GroupMember(group_id=group.id, email=email, position=idx)
        for idx, email in enumerate(emails)
    ])

    await db.commit()
    logger.info("Group %s created by %s with %d members", group.id, creator, len(emails))

    return await get_group_out(db, group.id)


async def get_group_out(db: AsyncSession, group_id: int) -> GroupOut:
    q = (
        select(Group)
        .options(selectinload(Group.members))
        .where(Group.id == group_id, Group.is_deleted == False)
        .execution_options(populate_existing=True)
    )
    group = (await db.execute(q)).scalar_one_or_none()

    if not group:
        raise GroupNotFoundError(group_id)

    return group_to_out(group)


async def list_group_for_member(db: AsyncSession, member: str) -> List[GroupOut]:
    q = (
        select(Group)
        .join(GroupMember)
        .options(selectinload(Group.members))
        .where(GroupMember.email == member, Group.is_deleted == False)
        .order_by(Group.id)
    )
    result = await db.execute(q)
    return [group_to_out(g) for g in result.scalars().unique().all()]


async def delete_group(db: AsyncSession, group_id: int, member: str):
    group = await get_active_group(db, group_id)

    # Only the creator can delete a group
    if group.created_by != member:
        raise PermissionDeniedError("Only the group creator can delete this group")

    group.is_deleted = True
    await db.commit()
    logger.info("Group %s deleted by %s", group_id, member)

    return {"status": "deleted"}
