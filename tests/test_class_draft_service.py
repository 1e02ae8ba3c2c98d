from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy import func, select

from conftest import add_class, add_membership
from dancey_portal.crud import class_crud
from dancey_portal.exceptions import ConflictError, NotFoundError, ValidationError
from dancey_portal.models.class_model import DanceClass
from dancey_portal.schemas.class_schema import (
    StepDetailsInput,
    StepMediaInput,
    StepPricingInput,
    StepScheduleInput,
)
from dancey_portal.services.class_draft_service import (
    STEP_DETAILS,
    STEP_MEDIA,
    STEP_PRICING,
    STEP_REVIEW,
    STEP_SCHEDULE,
    ClassDraftService,
    compute_resume_step,
)

DESCRIPTION = "A calm and steady yoga class for beginners."


def details(**overrides):
    data = {"step": "details", "class_name": "Yoga", "description": DESCRIPTION, "instructor_name": "Jane"}
    data.update(overrides)
    return StepDetailsInput(**data)


def media(image="img.png", video="vid.mp4"):
    return StepMediaInput(step="media", image_url=image, overview_video_url=video)


def schedule_entry():
    return StepScheduleInput(
        step="schedule", name="Morning Flow", date=date(2026, 11, 2), start_time=time(9, 0), end_time=time(10, 0)
    )


def pricing(membership_ids, price=50, class_pack_ids=None):
    return StepPricingInput(
        step="pricing", class_price=price, membership_ids=membership_ids, class_pack_ids=class_pack_ids or []
    )


def record(**fields):
    base = {
        "class_name": "", "class_description": "", "course_instructor": "",
        "image": "", "overview_video": "", "schedule": [], "class_price": 0,
    }
    base.update(fields)
    return SimpleNamespace(**base)


# ----- compute_resume_step -----

def test_resume_step_of_empty_record_is_details():
    assert compute_resume_step(record()) == STEP_DETAILS


def test_resume_step_is_highest_satisfied_step_plus_one():
    filled = record(class_name="Yoga", class_description=DESCRIPTION, course_instructor="Jane")
    assert compute_resume_step(filled) == STEP_MEDIA

    # pricing without media still resumes after pricing
    priced_only = record(class_price=Decimal("50"))
    assert compute_resume_step(priced_only) == STEP_REVIEW


def test_resume_step_is_idempotent_and_monotonic():
    steps = [
        {},
        {"class_name": "Yoga", "class_description": DESCRIPTION, "course_instructor": "Jane"},
        {"image": "img.png", "overview_video": "vid.mp4"},
        {"schedule": [{"schedule_id": "s1"}]},
        {"class_price": Decimal("50")},
    ]
    fields = {}
    previous = -1
    for extra in steps:
        fields.update(extra)
        current = compute_resume_step(record(**fields))
        assert current == compute_resume_step(record(**fields))
        assert current >= previous
        previous = current
    assert previous == STEP_REVIEW


def test_media_needs_both_files():
    assert compute_resume_step(record(
        class_name="Yoga", class_description=DESCRIPTION, course_instructor="Jane", image="img.png"
    )) == STEP_MEDIA


# ----- wizard -----

def test_end_to_end_wizard(db):
    membership = add_membership(db, name="m1")
    service = ClassDraftService(db)

    result = service.upsert_draft(details())
    class_id = result.dance_class.id
    assert service.resume_step(class_id) == STEP_MEDIA

    service.upsert_draft(media(), class_id)
    assert service.resume_step(class_id) == STEP_SCHEDULE

    service.upsert_draft(schedule_entry(), class_id)
    assert service.resume_step(class_id) == STEP_PRICING

    service.upsert_draft(pricing([membership.id]), class_id)
    assert service.resume_step(class_id) == STEP_REVIEW
    assert class_crud.get_membership_ids(db, class_id) == [membership.id]

    activated = service.activate(class_id)
    assert activated.is_active is True
    assert activated.is_completed is True


def test_details_update_preserves_later_steps(db):
    membership = add_membership(db)
    service = ClassDraftService(db)
    class_id = service.upsert_draft(details()).dance_class.id
    service.upsert_draft(media(), class_id)
    service.upsert_draft(schedule_entry(), class_id)
    service.upsert_draft(pricing([membership.id], price=45), class_id)

    before = service.get_class(class_id)
    snapshot = (before.image, before.overview_video, list(before.schedule), before.class_price)

    service.upsert_draft(details(class_name="Yoga Flow"), class_id)

    after = service.get_class(class_id)
    assert after.class_name == "Yoga Flow"
    assert (after.image, after.overview_video, list(after.schedule), after.class_price) == snapshot


def test_media_step_keeps_unsent_file_and_reports_replaced(db):
    service = ClassDraftService(db)
    class_id = service.upsert_draft(details()).dance_class.id
    service.upsert_draft(media(), class_id)

    result = service.upsert_draft(StepMediaInput(step="media", image_url="new.png"), class_id)

    assert result.dance_class.image == "new.png"
    assert result.dance_class.overview_video == "vid.mp4"
    assert result.replaced_media_urls == ["img.png"]


def test_schedule_step_appends_entries(db):
    service = ClassDraftService(db)
    class_id = service.upsert_draft(details()).dance_class.id
    service.upsert_draft(schedule_entry(), class_id)
    service.upsert_draft(schedule_entry(), class_id)

    entries = service.get_class(class_id).schedule
    assert len(entries) == 2
    assert entries[0]["start_time"] == "09:00"
    assert entries[0]["date"] == "2026-11-02"
    assert entries[0]["schedule_id"] != entries[1]["schedule_id"]


def test_non_details_step_requires_class_id(db):
    service = ClassDraftService(db)
    with pytest.raises(ValidationError):
        service.upsert_draft(media())
    assert db.execute(select(func.count(DanceClass.id))).scalar_one() == 0


def test_unknown_draft_is_not_found(db):
    service = ClassDraftService(db)
    with pytest.raises(NotFoundError):
        service.upsert_draft(media(), "missing-id")


def test_active_class_cannot_be_edited_through_wizard(db):
    db_class = add_class(db, name="Salsa", active=True)
    service = ClassDraftService(db)
    with pytest.raises(NotFoundError):
        service.upsert_draft(details(class_name="Changed"), db_class.id)
    assert service.get_class(db_class.id).class_name == "Salsa"


def test_pricing_with_unknown_membership_rolls_back(db):
    membership = add_membership(db)
    service = ClassDraftService(db)
    class_id = service.upsert_draft(details()).dance_class.id

    with pytest.raises(ValidationError) as exc_info:
        service.upsert_draft(pricing([membership.id, "missing"], price=80), class_id)

    assert exc_info.value.message == "Some selected memberships not found"
    db_class = service.get_class(class_id)
    assert db_class.class_price == 0
    assert class_crud.get_membership_ids(db, class_id) == []


def test_pricing_with_unknown_promotion_is_rejected(db):
    membership = add_membership(db)
    service = ClassDraftService(db)
    class_id = service.upsert_draft(details()).dance_class.id
    fields = StepPricingInput(step="pricing", class_price=50, promotion_id="nope", membership_ids=[membership.id])

    with pytest.raises(ValidationError):
        service.upsert_draft(fields, class_id)


# ----- lifecycle -----

def test_activate_unknown_class(db):
    with pytest.raises(NotFoundError):
        ClassDraftService(db).activate("missing-id")


def test_delete_guard_keeps_active_class(db):
    db_class = add_class(db, active=True)
    service = ClassDraftService(db)

    with pytest.raises(ConflictError):
        service.delete_draft(db_class.id)

    assert db.get(DanceClass, db_class.id) is not None


def test_delete_draft_returns_media_urls(db):
    service = ClassDraftService(db)
    class_id = service.upsert_draft(details()).dance_class.id
    service.upsert_draft(media(), class_id)

    media_urls = service.delete_draft(class_id)

    assert media_urls == ["img.png", "vid.mp4"]
    assert db.get(DanceClass, class_id) is None
