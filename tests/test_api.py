from splitledger.core.security import create_access_token


def _auth(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user['id'])})}"}


async def _register(client, name):
    resp = await client.post("/api/v1/users/", json={"email": f"{name.lower()}@example.com", "name": name})
    assert resp.status_code == 201
    return resp.json()


async def _group_with(client, creator, *members):
    resp = await client.post("/api/v1/groups/", json={"name": "Trip"}, headers=_auth(creator))
    assert resp.status_code == 201
    group = resp.json()
    for m in members:
        resp = await client.post(
            f"/api/v1/groups/{group['id']}/members",
            json={"user_id": m["id"]},
            headers=_auth(creator),
        )
        assert resp.status_code == 201
    return group


async def test_health(client):
    resp = await client.get("/api/v1/system/health")
    assert resp.json() == {"status": "ok"}


async def test_requires_bearer_token(client):
    resp = await client.get("/api/v1/users/me")
    assert resp.status_code == 401

    resp = await client.get("/api/v1/users/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401


async def test_me(client):
    alice = await _register(client, "Alice")

    resp = await client.get("/api/v1/users/me", headers=_auth(alice))
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice"


async def test_expense_balances_and_debts_flow(client):
    a = await _register(client, "A")
    b = await _register(client, "B")
    c = await _register(client, "C")
    group = await _group_with(client, a, b, c)

    resp = await client.post("/api/v1/expenses/", headers=_auth(a), json={
        "group_id": group["id"],
        "paid_by": a["id"],
        "amount": "30.00",
        "description": "Dinner",
        "participants": [
            {"user_id": a["id"], "share_amount": "10.00"},
            {"user_id": b["id"], "share_amount": "10.00"},
            {"user_id": c["id"], "share_amount": "10.00"},
        ],
    })
    assert resp.status_code == 201
    assert len(resp.json()["participants"]) == 3

    resp = await client.get(f"/api/v1/groups/{group['id']}/balances", headers=_auth(b))
    assert resp.status_code == 200
    balances = {x["user_id"]: float(x["balance"]) for x in resp.json()["balances"]}
    assert balances == {a["id"]: 20.0, b["id"]: -10.0, c["id"]: -10.0}

    resp = await client.get(f"/api/v1/groups/{group['id']}/debts", headers=_auth(b))
    debts = sorted((d["from_user"], d["to_user"], float(d["amount"])) for d in resp.json()["debts"])
    assert debts == [(b["id"], a["id"], 10.0), (c["id"], a["id"], 10.0)]

    resp = await client.post("/api/v1/settlements/", headers=_auth(b), json={
        "group_id": group["id"], "from_user": b["id"], "to_user": a["id"], "amount": "10.00",
    })
    assert resp.status_code == 201

    resp = await client.get(f"/api/v1/groups/{group['id']}/debts", headers=_auth(b))
    assert [(d["from_user"], d["to_user"]) for d in resp.json()["debts"]] == [(c["id"], a["id"])]


async def test_share_mismatch_is_rejected(client):
    a = await _register(client, "A")
    b = await _register(client, "B")
    group = await _group_with(client, a, b)

    resp = await client.post("/api/v1/expenses/", headers=_auth(a), json={
        "group_id": group["id"],
        "paid_by": a["id"],
        "amount": "50.00",
        "description": "Dinner",
        "participants": [
            {"user_id": a["id"], "share_amount": "20.00"},
            {"user_id": b["id"], "share_amount": "20.00"},
        ],
    })
    assert resp.status_code == 400
    assert "does not equal total amount" in resp.json()["detail"]

    resp = await client.get(f"/api/v1/groups/{group['id']}/expenses", headers=_auth(a))
    assert resp.json() == []


async def test_self_settlement_is_rejected(client):
    a = await _register(client, "A")
    b = await _register(client, "B")
    group = await _group_with(client, a, b)

    resp = await client.post("/api/v1/settlements/", headers=_auth(a), json={
        "group_id": group["id"], "from_user": a["id"], "to_user": a["id"], "amount": "5.00",
    })
    assert resp.status_code == 400


async def test_unknown_group_balances_are_empty(client):
    a = await _register(client, "A")

    resp = await client.get("/api/v1/groups/999/balances", headers=_auth(a))
    assert resp.status_code == 200
    assert resp.json() == {"group_id": 999, "balances": []}

    resp = await client.get("/api/v1/groups/999/debts", headers=_auth(a))
    assert resp.json() == {"group_id": 999, "debts": []}


async def test_non_member_cannot_read_balances(client):
    a = await _register(client, "A")
    outsider = await _register(client, "Mallory")
    group = await _group_with(client, a)

    resp = await client.get(f"/api/v1/groups/{group['id']}/balances", headers=_auth(outsider))
    assert resp.status_code == 403


async def test_delete_expense_and_undo_settlement(client):
    a = await _register(client, "A")
    b = await _register(client, "B")
    group = await _group_with(client, a, b)

    resp = await client.post("/api/v1/expenses/", headers=_auth(a), json={
        "group_id": group["id"], "paid_by": a["id"], "amount": "8.00", "description": "Taxi",
        "participants": [{"user_id": b["id"], "share_amount": "8.00"}],
    })
    expense_id = resp.json()["id"]

    resp = await client.post("/api/v1/settlements/", headers=_auth(b), json={
        "group_id": group["id"], "from_user": b["id"], "to_user": a["id"], "amount": "3.00",
    })
    settlement_id = resp.json()["id"]

    resp = await client.delete(f"/api/v1/settlements/{settlement_id}", headers=_auth(a))
    assert resp.status_code == 403
    resp = await client.delete(f"/api/v1/settlements/{settlement_id}", headers=_auth(b))
    assert resp.status_code == 200

    resp = await client.delete(f"/api/v1/expenses/{expense_id}", headers=_auth(a))
    assert resp.status_code == 200
    resp = await client.get(f"/api/v1/expenses/{expense_id}", headers=_auth(a))
    assert resp.status_code == 404

    resp = await client.get(f"/api/v1/groups/{group['id']}/balances", headers=_auth(a))
    assert resp.json()["balances"] == []


async def test_only_admins_manage_members(client):
    a = await _register(client, "A")
    b = await _register(client, "B")
    c = await _register(client, "C")
    group = await _group_with(client, a, b)

    resp = await client.post(
        f"/api/v1/groups/{group['id']}/members",
        json={"user_id": c["id"], "role": "admin"},
        headers=_auth(b),
    )
    assert resp.status_code == 403

    resp = await client.delete(f"/api/v1/groups/{group['id']}/members/{a['id']}", headers=_auth(b))
    assert resp.status_code == 403

    resp = await client.post(
        f"/api/v1/groups/{group['id']}/members",
        json={"user_id": c["id"], "role": "admin"},
        headers=_auth(a),
    )
    assert resp.status_code == 201

    resp = await client.delete(f"/api/v1/groups/{group['id']}/members/{b['id']}", headers=_auth(c))
    assert resp.status_code == 200
