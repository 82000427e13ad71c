"""
Integration tests for the group, expense and settlement endpoints.
"""

from conftest import ALICE, BOB, CARA, OUTSIDER, as_member


async def add_expense(client, group_id, member, **payload):
    return await client.post(f"/api/v1/expenses/{group_id}/add", json=payload, headers=as_member(member))


async def test_health(client):
    response = await client.get("/api/v1/system/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_missing_member_header_is_rejected(client):
    response = await client.get("/api/v1/groups/my-groups")

    assert response.status_code == 401
    assert response.json()["error_code"] == "ERR_UNAUTHORIZED"


async def test_create_group_puts_creator_first(client, trip_group):
    assert trip_group["name"] == "Goa Trip"
    assert trip_group["created_by"] == ALICE
    assert trip_group["member_emails"] == [ALICE, BOB, CARA]


async def test_create_group_rejects_duplicates(client):
    response = await client.post(
        "/api/v1/groups/",
        json={"name": "Dupes", "member_emails": [BOB, BOB]},
        headers=as_member(ALICE),
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "ERR_LEDGER_VALIDATION"


async def test_my_groups(client, trip_group):
    mine = await client.get("/api/v1/groups/my-groups", headers=as_member(CARA))
    theirs = await client.get("/api/v1/groups/my-groups", headers=as_member(OUTSIDER))

    assert [g["id"] for g in mine.json()] == [trip_group["id"]]
    assert theirs.json() == []


async def test_add_expense_splits_equally(client, trip_group):
    response = await add_expense(client, trip_group["id"], ALICE, description="Dinner", amount="1.00")

    assert response.status_code == 201
    body = response.json()
    assert body["paid_by"] == ALICE
    assert body["amount"] == "1.00"
    assert body["my_share"] == "0.34"
    assert [(s["member"], s["amount"]) for s in body["splits"]] == [
        (ALICE, "0.34"),
        (BOB, "0.33"),
        (CARA, "0.33"),
    ]


async def test_add_expense_for_another_payer(client, trip_group):
    response = await add_expense(client, trip_group["id"], ALICE, description="Fuel", amount="30", paid_by=CARA)

    assert response.status_code == 201
    assert response.json()["paid_by"] == CARA


async def test_add_expense_validation(client, trip_group):
    group_id = trip_group["id"]

    blank = await add_expense(client, group_id, ALICE, description="  ", amount="10")
    negative = await add_expense(client, group_id, ALICE, description="Lunch", amount="-5")
    stranger = await add_expense(client, group_id, ALICE, description="Lunch", amount="5", paid_by=OUTSIDER)
    garbage = await add_expense(client, group_id, ALICE, description="Lunch", amount="abc")

    assert blank.status_code == 400
    assert blank.json()["details"] == {"field": "description"}
    assert negative.status_code == 400
    assert stranger.status_code == 400
    assert stranger.json()["message"] == "Select a valid payer."
    assert garbage.status_code == 422
    assert garbage.json()["error_code"] == "ERR_VALIDATION"


async def test_non_member_cannot_add_expense(client, trip_group):
    response = await add_expense(client, trip_group["id"], OUTSIDER, description="Lunch", amount="5")

    assert response.status_code == 403


async def test_balances_and_settlements(client, trip_group):
    group_id = trip_group["id"]
    await add_expense(client, group_id, ALICE, description="Villa", amount="100")

    response = await client.get(f"/api/v1/settlements/{group_id}", headers=as_member(BOB))

    assert response.status_code == 200
    body = response.json()
    assert body["net"] == {ALICE: "66.66", BOB: "-33.33", CARA: "-33.33"}
    assert [b["status"] for b in body["balances"]] == ["should receive", "owes", "owes"]
    assert body["balances"][1]["label"] == "owes ₹33.33"
    assert body["settlements"] == [
        {"from_member": BOB, "to_member": ALICE, "amount": "33.33"},
        {"from_member": CARA, "to_member": ALICE, "amount": "33.33"},
    ]
    assert body["is_settled"] is False


async def test_payments_settle_the_group(client, trip_group):
    group_id = trip_group["id"]
    await add_expense(client, group_id, ALICE, description="Villa", amount="100")

    for member in (BOB, CARA):
        paid = await client.post(
            f"/api/v1/settlements/{group_id}/pay",
            json={"to_member": ALICE, "amount": "33.33", "expense_description": "Villa"},
            headers=as_member(member),
        )
        assert paid.status_code == 201
        assert paid.json()["from_member"] == member

    response = await client.get(f"/api/v1/settlements/{group_id}", headers=as_member(ALICE))
    body = response.json()

    assert body["net"] == {ALICE: "0.00", BOB: "0.00", CARA: "0.00"}
    assert body["settlements"] == []
    assert body["is_settled"] is True

    history = await client.get(f"/api/v1/settlements/{group_id}/history", headers=as_member(BOB))
    assert [p["from_member"] for p in history.json()] == [CARA, BOB]


async def test_payment_validation(client, trip_group):
    group_id = trip_group["id"]

    to_self = await client.post(
        f"/api/v1/settlements/{group_id}/pay",
        json={"to_member": BOB, "amount": "5"},
        headers=as_member(BOB),
    )
    to_stranger = await client.post(
        f"/api/v1/settlements/{group_id}/pay",
        json={"to_member": OUTSIDER, "amount": "5"},
        headers=as_member(BOB),
    )
    zero = await client.post(
        f"/api/v1/settlements/{group_id}/pay",
        json={"to_member": ALICE, "amount": "0"},
        headers=as_member(BOB),
    )

    assert to_self.status_code == 400
    assert to_stranger.status_code == 400
    assert zero.status_code == 400


async def test_group_detail_is_seen_from_the_acting_member(client, trip_group):
    group_id = trip_group["id"]
    await add_expense(client, group_id, ALICE, description="Dinner", amount="1.00")

    response = await client.get(f"/api/v1/groups/{group_id}", headers=as_member(BOB))

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Goa Trip"
    assert body["acting_member"] == BOB
    assert body["my_balance"] == "-0.33"
    assert body["i_owe"] == [{"from_member": BOB, "to_member": ALICE, "amount": "0.33"}]
    assert body["owed_to_me"] == []
    assert body["payments"] == []
    assert body["expenses"][0]["split"] == {ALICE: "0.34", BOB: "0.33", CARA: "0.33"}


async def test_expense_list_in_ledger_order(client, trip_group):
    group_id = trip_group["id"]
    await add_expense(client, group_id, ALICE, description="Breakfast", amount="9")
    await add_expense(client, group_id, BOB, description="Lunch", amount="12")

    response = await client.get(f"/api/v1/expenses/{group_id}/all", headers=as_member(CARA))

    assert [e["description"] for e in response.json()] == ["Breakfast", "Lunch"]
    assert [e["my_share"] for e in response.json()] == ["3.00", "4.00"]


async def test_outsider_cannot_view_group(client, trip_group):
    response = await client.get(f"/api/v1/groups/{trip_group['id']}", headers=as_member(OUTSIDER))

    assert response.status_code == 403
    assert response.json()["error_code"] == "ERR_PERM_001"


async def test_unknown_group(client):
    response = await client.get("/api/v1/settlements/999", headers=as_member(ALICE))

    assert response.status_code == 404


async def test_only_creator_can_delete_group(client, trip_group):
    group_id = trip_group["id"]

    denied = await client.delete(f"/api/v1/groups/{group_id}", headers=as_member(BOB))
    assert denied.status_code == 403

    deleted = await client.delete(f"/api/v1/groups/{group_id}", headers=as_member(ALICE))
    assert deleted.json() == {"status": "deleted"}

    gone = await client.get(f"/api/v1/groups/{group_id}", headers=as_member(ALICE))
    assert gone.status_code == 404


async def test_metrics(client, trip_group):
    await add_expense(client, trip_group["id"], ALICE, description="Dinner", amount="1.00")

    response = await client.get("/api/v1/system/metrics")

    assert response.json() == {"groups": 1, "expenses": 1, "payments": 0}


async def test_oversized_amounts_are_rejected(client, trip_group):
    group_id = trip_group["id"]

    for amount in ("1e20", "1e30"):
        response = await add_expense(client, group_id, ALICE, description="Typo", amount=amount)

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "amount"}

    paid = await client.post(
        f"/api/v1/settlements/{group_id}/pay",
        json={"to_member": ALICE, "amount": "1e20"},
        headers=as_member(BOB),
    )
    assert paid.status_code == 400

    listed = await client.get(f"/api/v1/expenses/{group_id}/all", headers=as_member(ALICE))
    assert listed.json() == []
