from datetime import date, datetime, time, timedelta, timezone

import pytest

from conftest import add_class
from dancey_portal.models.checkin_model import ClassCheckin
from dancey_portal.models.enrollment_model import Enrollment
from dancey_portal.models.rating_model import Rating, RatingStatus


@pytest.fixture
def enrolled_class(db):
    db_class = add_class(db, name="Salsa", schedule=[
        {"schedule_id": "s1", "name": "Evening", "date": "2030-01-01", "start_time": "18:00", "end_time": "19:00"},
    ])
    enrollments = [
        Enrollment(class_id=db_class.id, user_id=f"user-{i}", user_name=f"Dancer {i}", user_email=f"d{i}@example.com")
        for i in range(2)
    ]
    db.add_all(enrollments)
    db.commit()
    return db_class, enrollments


def test_enrolled_classes(client, enrolled_class):
    db_class, _ = enrolled_class

    data = client.get("/api/v1/classes/enrolled").json()

    assert [c["id"] for c in data] == [db_class.id]
    assert {u["user_name"] for u in data[0]["enrolled_users"]} == {"Dancer 0", "Dancer 1"}


# ----- RATINGS -----

def test_rating_review_flow(client, db, enrolled_class):
    db_class, enrollments = enrolled_class
    ratings = [
        Rating(enrollment_id=enrollments[0].id, class_id=db_class.id, user_id="user-0", rating=5, description="Great"),
        Rating(enrollment_id=enrollments[1].id, class_id=db_class.id, user_id="user-1", rating=2),
    ]
    db.add_all(ratings)
    db.commit()
    first_id, second_id = ratings[0].id, ratings[1].id

    pending = client.get("/api/v1/ratings", params={"status": "pending"}).json()
    assert pending["pagination"]["total_items"] == 2
    assert {r["class_name"] for r in pending["ratings"]} == {"Salsa"}

    approved = client.patch(f"/api/v1/ratings/{first_id}", json={"status": "approved"}).json()
    assert approved["status"] == "approved"
    client.patch(f"/api/v1/ratings/{second_id}", json={"status": "rejected"})

    summary = client.get(f"/api/v1/ratings/class/{db_class.id}").json()
    assert summary["total_ratings"] == 1
    assert summary["average_rating"] == 5.0


def test_rating_status_must_be_a_decision(client, db):
    assert client.patch("/api/v1/ratings/any", json={"status": "pending"}).status_code == 422
    assert client.patch("/api/v1/ratings/any", json={"status": "approved"}).status_code == 404


# ----- CHECK-INS -----

def test_checkins_by_type(client, db, enrolled_class):
    db_class, enrollments = enrolled_class
    now = datetime.now(timezone.utc)
    upcoming = ClassCheckin(
        enrollment_id=enrollments[0].id, class_id=db_class.id, user_id="user-0",
        checkin_date=date(2030, 1, 1), checkin_time=time(18, 0), schedule_id="s1",
    )
    ended = ClassCheckin(
        enrollment_id=enrollments[1].id, class_id=db_class.id, user_id="user-1",
        checkin_date=(now - timedelta(days=2)).date(), checkin_time=time(9, 0), checkin_status="true",
    )
    db.add_all([upcoming, ended])
    db.commit()
    upcoming_id = upcoming.id

    listed = client.get("/api/v1/check-ins", params={"type": "upcoming"}).json()
    assert listed["classes"][0]["checkin_count"] == 1

    detail = client.get(f"/api/v1/check-ins/class/{db_class.id}", params={"type": "upcoming"}).json()
    assert detail["class_name"] == "Salsa"
    assert [c["id"] for c in detail["check_ins"]] == [upcoming_id]
    assert detail["check_ins"][0]["schedule_time"] == {"start_time": "18:00", "end_time": "19:00"}
    assert detail["check_ins"][0]["user_name"] == "Dancer 0"

    everything = client.get(f"/api/v1/check-ins/class/{db_class.id}", params={"type": "all"}).json()
    assert len(everything["check_ins"]) == 2

    attended = client.get("/api/v1/check-ins", params={"type": "all", "status": "true"}).json()
    assert attended["classes"][0]["checkin_count"] == 1


def test_checkin_status_update_and_delete(client, db, enrolled_class):
    db_class, enrollments = enrolled_class
    checkin = ClassCheckin(enrollment_id=enrollments[0].id, class_id=db_class.id, user_id="user-0")
    db.add(checkin)
    db.commit()
    checkin_id = checkin.id

    response = client.patch(f"/api/v1/check-ins/{checkin_id}", json={"checkin_status": True})
    assert response.json() == {"id": checkin_id, "checkin_status": "true"}

    assert client.delete(f"/api/v1/check-ins/{checkin_id}").status_code == 200
    assert client.delete(f"/api/v1/check-ins/{checkin_id}").status_code == 404
