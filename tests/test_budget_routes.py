from datetime import date

from famfin.db import models


def set_budget(db, family, month, amount):
    db.add(models.Budget(family=family, month=month, amount=amount))
    db.commit()


def test_admin_sets_budget(client, db, admin):
    response = client.post("/budget/edit-budget", json={
        "userId": admin.id,
        "budget": [
            {"month": "2024-03-01T00:00:00.000Z", "amount": 100},
            {"month": "2024-04-15", "amount": 80},
        ],
    })
    assert response.status_code == 200

    budget = client.get("/budget/get-budget", params={"userID": admin.id}).json()["budget"]
    assert [(b["month"], b["amount"]) for b in budget] == [("2024-03-01", 100), ("2024-04-01", 80)]
    assert all(b["familyID"] == admin.family_id for b in budget)


def test_budget_is_one_entry_per_month(client, db, admin):
    client.post("/budget/edit-budget", json={"userId": admin.id, "budget": [{"month": "2024-03-01", "amount": 100}]})
    client.post("/budget/edit-budget", json={"userId": admin.id, "budget": [{"month": "2024-03-01", "amount": 150}]})

    rows = db.query(models.Budget).all()
    assert len(rows) == 1
    assert rows[0].amount == 150


def test_user_cannot_set_budget(client, db, alice):
    response = client.post("/budget/edit-budget", json={"userId": alice.id, "budget": [{"month": "2024-03-01", "amount": 1}]})
    assert response.status_code == 400
    assert response.json() == {"message": "Only admin can edit budget"}
    assert db.query(models.Budget).count() == 0


def test_family_members_read_the_family_budget(client, db, family, alice):
    set_budget(db, family, date(2024, 3, 1), 100)
    budget = client.get("/budget/get-budget", params={"userID": alice.id}).json()["budget"]
    assert len(budget) == 1


def test_save_pocket_money(client, db, family, admin, alice, bob):
    set_budget(db, family, date(2024, 3, 1), 100)

    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [
            {"userId": alice.id, "month": "2024-03-01", "amount": 60},
            {"userId": bob.id, "month": "2024-03-01", "amount": 40},
        ],
    })

    assert response.status_code == 200
    assert db.query(models.PocketMoney).count() == 2


def test_pocket_money_over_budget_writes_nothing(client, db, family, admin, alice, bob):
    set_budget(db, family, date(2024, 3, 1), 100)

    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [
            {"userId": alice.id, "month": "2024-03-01", "amount": 60},
            {"userId": bob.id, "month": "2024-03-01", "amount": 41},
        ],
    })

    assert response.status_code == 400
    assert response.json()["message"].startswith("Budget limit exceeded")
    assert db.query(models.PocketMoney).count() == 0


def test_pocket_money_cap_counts_existing_entries(client, db, family, admin, alice, bob):
    set_budget(db, family, date(2024, 3, 1), 100)
    db.add(models.PocketMoney(owner=alice, month=date(2024, 3, 1), amount=90))
    db.commit()

    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": bob.id, "month": "2024-03-01", "amount": 20}],
    })

    assert response.status_code == 400
    assert db.query(models.PocketMoney).count() == 1


def test_month_without_budget_is_not_capped(client, db, admin, alice):
    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": alice.id, "month": "2024-07-01", "amount": 5000}],
    })
    assert response.status_code == 200


def test_pocket_money_without_id_updates_existing_month(client, db, admin, alice):
    existing = models.PocketMoney(owner=alice, month=date(2024, 3, 1), amount=10)
    db.add(existing)
    db.commit()

    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": alice.id, "month": "2024-03-20", "amount": 25}],
    })

    assert response.status_code == 200
    rows = db.query(models.PocketMoney).all()
    assert len(rows) == 1
    assert rows[0].id == existing.id
    assert rows[0].amount == 25


def test_pocket_money_for_outsider_is_rejected(client, db, admin, outsider):
    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": outsider.id, "month": "2024-03-01", "amount": 5}],
    })
    assert response.status_code == 400
    assert db.query(models.PocketMoney).count() == 0


def test_negative_pocket_money_is_rejected(client, admin, alice):
    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": alice.id, "month": "2024-03-01", "amount": -5}],
    })
    assert response.status_code == 400


def test_user_cannot_plan_pocket_money(client, db, alice):
    response = client.post("/budget/edit-pocket-money", json={
        "userId": alice.id,
        "pocketMoney": [{"userId": alice.id, "month": "2024-03-01", "amount": 5}],
    })
    assert response.status_code == 400
    assert response.json() == {"message": "Only admin can edit pocket money"}


def test_get_pocket_money_per_role(client, db, family, admin, alice, bob):
    set_budget(db, family, date(2024, 3, 1), 50)
    db.add_all([
        models.PocketMoney(owner=alice, month=date(2024, 3, 1), amount=30),
        models.PocketMoney(owner=bob, month=date(2024, 3, 1), amount=30),
    ])
    db.commit()

    as_admin = client.get("/budget/get-pocket-money", params={"userID": admin.id}).json()
    assert len(as_admin["pocketMoney"]) == 2
    assert as_admin["exceeded"] == ["2024-03-01"]

    as_alice = client.get("/budget/get-pocket-money", params={"userID": alice.id}).json()
    assert [e["userId"] for e in as_alice["pocketMoney"]] == [alice.id]


def test_overview(client, db, alice):
    db.add_all([
        models.PocketMoney(owner=alice, month=date(2024, 3, 1), amount=40),
        models.CashFlow(owner=alice, name="gift", amount=20, date=date(2024, 3, 2)),
        models.CashFlow(owner=alice, name="sweets", amount=-5, date=date(2024, 3, 31)),
        models.CashFlow(owner=alice, name="next month", amount=-100, date=date(2024, 4, 1)),
    ])
    db.commit()

    response = client.get("/budget/get-overview", params={"userID": alice.id, "month": "2024-03-10"})

    assert response.status_code == 200
    assert response.json() == {
        "month": "2024-03-01",
        "pocketMoney": 40,
        "income": 20,
        "totalIncome": 60,
        "expense": -5,
        "total": 55,
    }


def test_budget_save_has_no_id_in_body(client, admin):
    response = client.post("/budget/edit-budget", json={"userId": admin.id, "budget": [{"month": "2024-03-01", "amount": 10}]})
    assert response.json() == {"message": "Budget saved successfully"}


def test_budget_cannot_drop_below_planned_pocket_money(client, db, family, admin, alice):
    set_budget(db, family, date(2024, 1, 1), 100)
    db.add(models.PocketMoney(owner=alice, month=date(2024, 1, 1), amount=90))
    db.commit()

    response = client.post("/budget/edit-budget", json={"userId": admin.id, "budget": [{"month": "2024-01-01", "amount": 50}]})

    assert response.status_code == 400
    assert response.json() == {"message": "Budget below planned pocket money: January 2024"}
    budget = db.query(models.Budget).one()
    assert budget.amount == 100


def test_pocket_money_save_only_checks_its_own_months(client, db, family, admin, alice):
    # a family already over budget in January, e.g. from before the cap existed
    set_budget(db, family, date(2024, 1, 1), 50)
    db.add(models.PocketMoney(owner=alice, month=date(2024, 1, 1), amount=90))
    db.commit()

    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": alice.id, "month": "2024-02-01", "amount": 20}],
    })

    assert response.status_code == 200
    assert response.json() == {"message": "Pocket money saved successfully"}


def test_moving_entry_onto_taken_month_writes_nothing(client, db, admin, alice):
    march = models.PocketMoney(owner=alice, month=date(2024, 3, 1), amount=10)
    april = models.PocketMoney(owner=alice, month=date(2024, 4, 1), amount=20)
    db.add_all([march, april])
    db.commit()

    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [
            {"userId": alice.id, "month": "2024-05-01", "amount": 7},
            {"id": april.id, "userId": alice.id, "month": "2024-03-01", "amount": 30},
        ],
    })

    assert response.status_code == 400
    assert response.json() == {"message": "Pocket money already planned for that month"}
    rows = {(e.month, e.amount) for e in db.query(models.PocketMoney).all()}
    assert rows == {(date(2024, 3, 1), 10), (date(2024, 4, 1), 20)}


def test_month_must_be_a_date(client, db, admin, alice):
    response = client.post("/budget/edit-pocket-money", json={
        "userId": admin.id,
        "pocketMoney": [{"userId": alice.id, "month": 1709251200, "amount": 5}],
    })
    assert response.status_code == 400
    assert db.query(models.PocketMoney).count() == 0
