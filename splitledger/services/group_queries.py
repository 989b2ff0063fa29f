from typing import Iterable, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember


async def get_group(db: AsyncSession, group_id: int):
    res = await db.execute(select(Group).where(Group.id == group_id))
    return res.scalar_one_or_none()


async def get_membership(db: AsyncSession, group_id: int, user_id: int):
    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    )
    res = await db.execute(q)
    return res.scalar_one_or_none()


async def member_user_ids(db: AsyncSession, group_id: int, user_ids: Iterable[int]) -> Set[int]:
    """Subset of ``user_ids`` that are members of the group."""
    q = select(GroupMember.user_id).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id.in_(list(user_ids))
    )
    res = await db.execute(q)
    return {row[0] for row in res.all()}
