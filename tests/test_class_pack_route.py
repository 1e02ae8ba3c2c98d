from sqlalchemy import func, select

from conftest import add_class
from dancey_portal.models.class_pack_model import ClassPack


def _create_pack(client, class_ids, **extra):
    body = {"pack_name": "Starter Bundle", "class_ids": class_ids}
    body.update(extra)
    return client.post("/api/v1/class-packs", json=body)


def test_create_pack_computes_price(client, db):
    a = add_class(db, name="Salsa", price="10.00")
    b = add_class(db, name="Tango", price="20.00")

    response = _create_pack(client, [a.id, b.id], is_discount_enabled=True, discount_percent=25)

    assert response.status_code == 201
    data = response.json()
    assert data["price"] == 22.5
    assert data["class_count"] == 2
    assert [c["class_name"] for c in data["classes"]] == ["Salsa", "Tango"]


def test_create_pack_without_discount(client, db):
    a = add_class(db, name="Salsa", price="10.00")
    b = add_class(db, name="Tango", price="20.00")

    response = _create_pack(client, [a.id, b.id], discount_percent=25)

    assert response.json()["price"] == 30.0


def test_create_pack_with_unknown_class_creates_nothing(client, db):
    a = add_class(db, name="Salsa", price="10.00")

    response = _create_pack(client, [a.id, "missing"])

    assert response.status_code == 400
    assert response.json() == {"detail": "Some selected classes not found", "field": "class_id"}
    assert db.execute(select(func.count(ClassPack.id))).scalar_one() == 0


def test_create_pack_requires_a_class(client, db):
    response = _create_pack(client, [])
    assert response.status_code == 422


def test_discount_above_hundred_is_rejected(client, db):
    a = add_class(db, name="Salsa", price="10.00")
    response = _create_pack(client, [a.id], is_discount_enabled=True, discount_percent=150)
    assert response.status_code == 422


def test_update_with_same_set_keeps_price(client, db):
    a = add_class(db, name="Salsa", price="10.00")
    b = add_class(db, name="Tango", price="20.00")
    pack_id = _create_pack(client, [a.id, b.id], is_discount_enabled=True, discount_percent=25).json()["id"]

    response = client.put(f"/api/v1/class-packs/{pack_id}", json={
        "pack_name": "Renamed Bundle",
        "is_active": False,
        "class_ids": [b.id, a.id],
        "is_discount_enabled": True,
        "discount_percent": 50,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["price"] == 22.5
    assert data["price_recomputed"] is False
    assert data["pack_name"] == "Renamed Bundle"
    assert data["is_active"] is False


def test_update_with_changed_set_recomputes_price(client, db):
    a = add_class(db, name="Salsa", price="10.00")
    b = add_class(db, name="Tango", price="20.00")
    c = add_class(db, name="Waltz", price="30.00")
    pack_id = _create_pack(client, [a.id, b.id]).json()["id"]

    response = client.put(f"/api/v1/class-packs/{pack_id}", json={
        "pack_name": "Starter Bundle",
        "class_ids": [a.id, c.id],
        "is_discount_enabled": True,
        "discount_percent": 10,
    })

    data = response.json()
    assert data["price_recomputed"] is True
    assert data["price"] == 36.0
    assert sorted(cls["id"] for cls in data["classes"]) == sorted([a.id, c.id])


def test_update_unknown_pack(client, db):
    a = add_class(db, name="Salsa")
    response = client.put("/api/v1/class-packs/missing", json={"pack_name": "X", "class_ids": [a.id]})
    assert response.status_code == 404


def test_class_lists_its_packs(client, db):
    a = add_class(db, name="Salsa")
    pack_id = _create_pack(client, [a.id]).json()["id"]

    response = client.get(f"/api/v1/classes/{a.id}/class-packs")

    assert response.json() == {"class_id": a.id, "ids": [pack_id]}


def test_list_and_delete_pack(client, db):
    a = add_class(db, name="Salsa")
    pack_id = _create_pack(client, [a.id]).json()["id"]

    listed = client.get("/api/v1/class-packs", params={"search": "starter"}).json()
    assert [p["id"] for p in listed["class_packs"]] == [pack_id]
    assert listed["pagination"]["total_items"] == 1

    assert client.delete(f"/api/v1/class-packs/{pack_id}").status_code == 200
    assert client.get(f"/api/v1/class-packs/{pack_id}").status_code == 404
