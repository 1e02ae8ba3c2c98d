from sqlalchemy import func, select

from conftest import add_class
from dancey_portal.models.instructor_model import Instructor
from dancey_portal.services.instructor_service import INSTRUCTOR_CLAIMS


def _create(client, **overrides):
    body = {"name": "Maria Lopez", "email": "Maria@Dancey.com", "password": "secret123"}
    body.update(overrides)
    return client.post("/api/v1/instructors", json=body)


def test_create_instructor_opens_identity_account(client, db, identity):
    salsa = add_class(db, name="Salsa")

    response = _create(client, class_ids=[salsa.id])

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "maria@dancey.com"
    assert data["class_ids"] == [salsa.id]
    assert data["generated_password"] is None
    assert identity.accounts == {data["id"]: "maria@dancey.com"}
    assert identity.claims[data["id"]] == INSTRUCTOR_CLAIMS


def test_generated_password_is_returned_once(client, db):
    response = _create(client, password=None, auto_generate_password=True)

    assert len(response.json()["generated_password"]) == 12
    assert "generated_password" not in client.get(f"/api/v1/instructors/{response.json()['id']}").json()


def test_password_required_without_auto_generate(client, db):
    assert _create(client, password=None).status_code == 422


def test_duplicate_email_conflicts(client, db):
    _create(client)
    response = _create(client, email="maria@dancey.com")
    assert response.status_code == 409
    assert response.json()["field"] == "email"


def test_identity_failure_rolls_back(client, db, identity):
    identity.fail_create = True

    response = _create(client)

    assert response.status_code == 502
    assert db.execute(select(func.count(Instructor.id))).scalar_one() == 0


def test_unknown_class_rolls_back(client, db, identity):
    response = _create(client, class_ids=["missing"])

    assert response.status_code == 400
    assert identity.accounts == {}
    assert db.execute(select(func.count(Instructor.id))).scalar_one() == 0


def test_update_replaces_classes(client, db):
    salsa = add_class(db, name="Salsa")
    tango = add_class(db, name="Tango")
    instructor_id = _create(client, class_ids=[salsa.id]).json()["id"]

    renamed = client.put(f"/api/v1/instructors/{instructor_id}", json={"name": "Maria L"})
    assert renamed.json()["class_ids"] == [salsa.id]

    replaced = client.put(f"/api/v1/instructors/{instructor_id}", json={"class_ids": [tango.id]})
    assert replaced.json()["class_ids"] == [tango.id]
    assert replaced.json()["name"] == "Maria L"


def test_toggle_status_disables_identity(client, db, identity):
    instructor_id = _create(client).json()["id"]

    response = client.patch(f"/api/v1/instructors/{instructor_id}/toggle-status", json={"status": False})

    assert response.json()["status"] is False
    assert identity.disabled[instructor_id] is True


def test_delete_instructor(client, db, identity, storage):
    instructor_id = _create(client, profile_photo_url="https://cdn/maria.png").json()["id"]

    response = client.delete(f"/api/v1/instructors/{instructor_id}")

    assert response.json()["photo_deleted"] is True
    assert identity.accounts == {}
    assert storage.deleted == ["https://cdn/maria.png"]
    assert client.get(f"/api/v1/instructors/{instructor_id}").status_code == 404


def test_list_instructors_with_search(client, db):
    _create(client)
    _create(client, name="Tom Hardy", email="tom@dancey.com")

    data = client.get("/api/v1/instructors", params={"search": "tom"}).json()

    assert [i["name"] for i in data["instructors"]] == ["Tom Hardy"]
    assert data["pagination"]["total_items"] == 1
