import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.core.exceptions import NotFoundError, ValidationError
from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember, ROLE_ADMIN
from splitledger.schemas.group import GroupCreate, GroupMemberCreate, GroupUpdate
from splitledger.services.group_queries import get_group, get_membership
from splitledger.services.user_queries import get_user_by_id

logger = logging.getLogger(__name__)

async def create_group(db: AsyncSession, data: GroupCreate, creator_id: int):
    if not await get_user_by_id(db, creator_id):
        raise NotFoundError(f"User with id {creator_id} not found")

    group = Group(name=data.name, description=data.description, created_by=creator_id)
    db.add(group)
    await db.flush()

    # creator joins as admin in the same transaction
    member = GroupMember(group_id=group.id, user_id=creator_id, role=ROLE_ADMIN)
    db.add(member)

    await db.commit()
    await db.refresh(group)
    logger.info("Created group %s by user %s", group.id, creator_id)
    return group

async def update_group(db: AsyncSession, group_id: int, data: GroupUpdate):
    group = await get_group(db, group_id)
    if not group:
        return None

    changes = data.model_dump(exclude_unset=True)
    # name is required; description may be cleared
    if changes.get("name", "") is None:
        del changes["name"]
    if not changes:
        return group

    for field, value in changes.items():
        setattr(group, field, value)

    await db.commit()
    await db.refresh(group)
    return group

async def add_member(db: AsyncSession, group_id: int, data: GroupMemberCreate):
    if not await get_group(db, group_id):
        raise NotFoundError(f"Group with id {group_id} not found")

    if not await get_user_by_id(db, data.user_id):
        raise NotFoundError(f"User with id {data.user_id} not found")

    if await get_membership(db, group_id, data.user_id):
        raise ValidationError("User is already a member of this group")

    member = GroupMember(group_id=group_id, user_id=data.user_id, role=data.role)
    db.add(member)
    await db.commit()
    await db.refresh(member)
    logger.info("Added user %s to group %s as %s", data.user_id, group_id, data.role)
    return member

async def remove_member(db: AsyncSession, group_id: int, user_id: int) -> bool:
    member = await get_membership(db, group_id, user_id)
    if not member:
        return False

    await db.delete(member)
    await db.commit()
    logger.info("Removed user %s from group %s", user_id, group_id)
    return True

async def get_group_members(db: AsyncSession, group_id: int):
    q = (
        select(GroupMember)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.id)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def list_groups_for_user(db: AsyncSession, user_id: int):
    q = (
        select(Group)
        .join(GroupMember)
        .where(GroupMember.user_id == user_id)
        .order_by(Group.id)
    )
    result = await db.execute(q)
    return result.scalars().all()
