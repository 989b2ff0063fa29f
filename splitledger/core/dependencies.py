from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import async_session
from splitledger.core.security import decode_token, get_bearer_token
from splitledger.services.group_queries import get_group, get_membership
from splitledger.services.user_queries import get_user_by_id
from splitledger.models.group_member import ROLE_ADMIN

async def get_db():
    async with async_session() as session:
        yield session

async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)):
    token = get_bearer_token(request)
    payload = decode_token(token)
    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Could not validate credentials")

    user = await get_user_by_id(db, user_id)

    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    return user

async def check_group_membership(db: AsyncSession, group_id: int, user_id: int):
    if not await get_group(db, group_id):
        raise HTTPException(404, "Group does not exist")

    member = await get_membership(db, group_id, user_id)

    if not member:
        raise HTTPException(403, "You are not a member of this group")

    return member

async def require_group_member(
    group_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    await check_group_membership(db, group_id, user.id)
    return user

async def require_member_or_empty_group(
    group_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    # Balance views of unknown groups degrade to empty results instead of 404.
    if await get_group(db, group_id) is None:
        return user
    await check_group_membership(db, group_id, user.id)
    return user

async def require_group_admin(
    group_id: int,
    db: AsyncSession = Depends(get_db),
    user = Depends(get_current_user),
):
    member = await check_group_membership(db, group_id, user.id)
    if member.role != ROLE_ADMIN:
        raise HTTPException(403, "Only group admins can manage members")
    return user
