from decimal import Decimal

import pytest

from splitledger.core.exceptions import NotFoundError, ValidationError
from splitledger.schemas.settlement import SettlementCreate
from splitledger.services.settlement_service import (
    create_settlement,
    delete_settlement,
    get_group_settlements,
)

from tests.factories import make_group, make_user, make_users, settle


async def test_create_settlement(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    group = await make_group(db, alice, bob)

    s = await settle(db, group, bob, alice, "12.34", description="Cash")

    assert s.id is not None
    assert (s.from_user, s.to_user, s.amount) == (bob.id, alice.id, Decimal("12.34"))
    assert s.description == "Cash"
    assert s.settled_at is not None


async def test_settlement_without_description(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    group = await make_group(db, alice, bob)

    assert (await settle(db, group, bob, alice, "1")).description is None


async def test_rejects_self_settlement(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    group = await make_group(db, alice, bob)

    with pytest.raises(ValidationError, match="yourself"):
        await settle(db, group, alice, alice, "5")

    assert await get_group_settlements(db, group.id) == []


async def test_rejects_non_member_parties(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    outsider = await make_user(db, "Mallory")
    group = await make_group(db, alice, bob)

    with pytest.raises(ValidationError, match="Payer is not a member"):
        await settle(db, group, outsider, alice, "5")
    with pytest.raises(ValidationError, match="Receiver is not a member"):
        await settle(db, group, alice, outsider, "5")


async def test_rejects_missing_group(db):
    alice, bob = await make_users(db, "Alice", "Bob")

    with pytest.raises(NotFoundError):
        await create_settlement(db, SettlementCreate(
            group_id=999, from_user=alice.id, to_user=bob.id, amount=Decimal("5"),
        ))


async def test_overpayment_is_allowed(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    group = await make_group(db, alice, bob)

    await settle(db, group, bob, alice, "500")
    await settle(db, group, bob, alice, "500")

    assert len(await get_group_settlements(db, group.id)) == 2


async def test_group_settlements_in_recorded_order(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    group = await make_group(db, alice, bob)
    other = await make_group(db, alice, bob, name="Other")
    first = await settle(db, group, bob, alice, "1")
    second = await settle(db, group, alice, bob, "2")
    await settle(db, other, alice, bob, "3")

    assert [s.id for s in await get_group_settlements(db, group.id)] == [first.id, second.id]
    assert await get_group_settlements(db, 999) == []


async def test_delete_settlement(db):
    alice, bob = await make_users(db, "Alice", "Bob")
    group = await make_group(db, alice, bob)
    s = await settle(db, group, bob, alice, "1")

    assert await delete_settlement(db, s.id) is True
    assert await delete_settlement(db, s.id) is False
    assert await get_group_settlements(db, group.id) == []
