from conftest import add_class, add_membership
from dancey_portal.models.class_model import DanceClass

DESCRIPTION = "Latin rhythms and partner work for beginners."


def _step(client, fields, class_id=None):
    body = {"fields": fields}
    if class_id:
        body["class_id"] = class_id
    return client.post("/api/v1/classes/draft", json=body)


def _details(name="Salsa Basics"):
    return {"step": "details", "class_name": name, "description": DESCRIPTION, "instructor_name": "Jane Doe"}


def test_wizard_over_http(client, db, storage):
    membership = add_membership(db)

    created = _step(client, _details())
    assert created.status_code == 200
    class_id = created.json()["id"]
    assert created.json()["resume_step"] == 1

    media = _step(client, {"step": "media", "image_url": "https://cdn/img.png", "overview_video_url": "https://cdn/vid.mp4"}, class_id)
    assert media.json()["resume_step"] == 2

    schedule = _step(client, {
        "step": "schedule", "name": "Evening", "date": "2026-11-03", "start_time": "18:00", "end_time": "19:30",
    }, class_id)
    assert schedule.json()["resume_step"] == 3
    assert schedule.json()["dance_class"]["schedule"][0]["end_time"] == "19:30:00"

    priced = _step(client, {"step": "pricing", "class_price": 50, "membership_ids": [membership.id]}, class_id)
    assert priced.json()["resume_step"] == 4
    assert priced.json()["dance_class"]["class_price"] == 50.0

    assert client.get(f"/api/v1/classes/{class_id}/resume-step").json() == {"id": class_id, "step_index": 4}
    assert client.get(f"/api/v1/classes/{class_id}/memberships").json()["ids"] == [membership.id]

    activated = client.post(f"/api/v1/classes/{class_id}/activate")
    assert activated.json() == {"id": class_id, "is_active": True, "is_completed": True}
    assert storage.deleted == []


def test_unknown_step_is_rejected(client, db):
    response = _step(client, {"step": "review"})
    assert response.status_code == 422


def test_details_validation(client, db):
    response = _step(client, {"step": "details", "class_name": "Salsa!", "description": "short", "instructor_name": "J"})
    assert response.status_code == 422


def test_step_without_class_id(client, db):
    response = _step(client, {"step": "media", "image_url": "https://cdn/img.png"})
    assert response.status_code == 400
    assert response.json()["field"] == "class_id"


def test_replaced_media_is_deleted(client, db, storage):
    class_id = _step(client, _details()).json()["id"]
    _step(client, {"step": "media", "image_url": "https://cdn/old.png"}, class_id)

    response = _step(client, {"step": "media", "image_url": "https://cdn/new.png"}, class_id)

    assert response.json()["replaced_media_urls"] == []
    assert storage.deleted == ["https://cdn/old.png"]


def test_failed_media_cleanup_is_reported_not_raised(client, db, storage):
    class_id = _step(client, _details()).json()["id"]
    _step(client, {"step": "media", "image_url": "https://cdn/old.png"}, class_id)
    storage.failing.add("https://cdn/old.png")

    response = _step(client, {"step": "media", "image_url": "https://cdn/new.png"}, class_id)

    assert response.status_code == 200
    assert response.json()["replaced_media_urls"] == ["https://cdn/old.png"]


def test_delete_draft_removes_media(client, db, storage):
    draft = add_class(db, name="Draft", active=False, overview_video="https://cdn/vid.mp4")
    draft_id, image_url = draft.id, draft.image
    storage.failing.add("https://cdn/vid.mp4")

    response = client.delete(f"/api/v1/classes/{draft_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["media_urls"] == [image_url, "https://cdn/vid.mp4"]
    assert data["pending_media_urls"] == ["https://cdn/vid.mp4"]
    assert storage.deleted == [image_url]


def test_delete_active_class_conflicts(client, db, storage):
    active = add_class(db, name="Active")

    response = client.delete(f"/api/v1/classes/{active.id}")

    assert response.status_code == 409
    assert db.get(DanceClass, active.id) is not None
    assert storage.deleted == []


def test_toggle_status(client, db):
    db_class = add_class(db, name="Salsa")

    off = client.patch(f"/api/v1/classes/{db_class.id}/toggle-status", json={"is_active": False})
    assert off.json() == {"id": db_class.id, "is_active": False, "is_completed": True}

    on = client.patch(f"/api/v1/classes/{db_class.id}/toggle-status", json={"is_active": True})
    assert on.json()["is_active"] is True


def test_class_lists(client, db):
    add_class(db, name="Salsa")
    add_class(db, name="Tango", active=False, is_completed=True)
    add_class(db, name="Draft", active=False, price="0", overview_video="https://cdn/vid.mp4")

    completed = client.get("/api/v1/classes").json()
    assert {c["class_name"] for c in completed["classes"]} == {"Salsa", "Tango"}
    assert completed["total_active_classes"] == 1
    assert completed["total_completed_classes"] == 2

    inactive = client.get("/api/v1/classes", params={"status": "inactive"}).json()
    assert [c["class_name"] for c in inactive["classes"]] == ["Tango"]

    incomplete = client.get("/api/v1/classes/incomplete").json()["classes"]
    assert [c["class_name"] for c in incomplete] == ["Draft"]
    assert incomplete[0]["last_step"] == 2

    available = client.get("/api/v1/classes/available").json()
    assert [c["class_name"] for c in available] == ["Salsa"]


def test_schedule_crud(client, db):
    db_class = add_class(db, name="Salsa")
    url = f"/api/v1/classes/{db_class.id}/schedule"

    created = client.post(url, json={"name": "Morning", "date": "2026-11-02", "start_time": "09:00", "end_time": "10:00"})
    assert created.status_code == 201
    schedule_id = created.json()["schedule_id"]

    updated = client.put(f"{url}/{schedule_id}", json={"end_time": "11:00"})
    assert updated.json()["end_time"] == "11:00:00"

    invalid = client.put(f"{url}/{schedule_id}", json={"end_time": "08:00"})
    assert invalid.status_code == 400

    assert len(client.get(url, params={"date": "2026-11-02"}).json()) == 1
    assert client.get(url, params={"date": "2026-11-03"}).json() == []

    assert client.delete(f"{url}/{schedule_id}").status_code == 200
    assert client.delete(f"{url}/{schedule_id}").status_code == 404


def test_requires_authentication(anonymous_client):
    response = anonymous_client.get("/api/v1/classes")
    assert response.status_code == 401
