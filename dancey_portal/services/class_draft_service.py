# dancey_portal/services/class_draft_service.py
"""
Multi-step creation of a class.

A class is built over four independent steps (details, media, schedule,
pricing). Each step is one transaction, so an abandoned wizard leaves the
already submitted steps in place and can be resumed with the class id.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from dancey_portal.database import atomic
from dancey_portal.exceptions import ConflictError, NotFoundError, ValidationError
from dancey_portal.models.class_model import DanceClass
from dancey_portal.models.promotion_model import Promotion
from dancey_portal.schemas.class_schema import (
    StepDetailsInput,
    StepMediaInput,
    StepPricingInput,
    StepScheduleInput,
)
from dancey_portal.services import relationship_service
from dancey_portal.services.schedule_service import append_entry

logger = logging.getLogger(__name__)


# ----- CONSTANTS -----

STEP_DETAILS = 0
STEP_MEDIA = 1
STEP_SCHEDULE = 2
STEP_PRICING = 3
# Review step, reached once every input step is satisfied
STEP_REVIEW = 4


def _details_done(record) -> bool:
    return bool(record.class_name and record.class_description and record.course_instructor)


def _media_done(record) -> bool:
    return bool(record.image and record.overview_video)


def _schedule_done(record) -> bool:
    return bool(record.schedule)


def _pricing_done(record) -> bool:
    return (record.class_price or 0) > 0


STEP_CHECKS: Tuple[Callable, ...] = (_details_done, _media_done, _schedule_done, _pricing_done)


def compute_resume_step(record) -> int:
    """
    Index of the step a resuming admin should land on.

    The highest satisfied step + 1, capped at the review step. A record with
    nothing filled in resumes at step 0.
    """
    step = STEP_DETAILS
    for index, is_done in enumerate(STEP_CHECKS):
        if is_done(record):
            step = index + 1
    return min(step, STEP_REVIEW)


@dataclass
class DraftResult:
    dance_class: DanceClass
    replaced_media_urls: List[str] = field(default_factory=list)


class ClassDraftService:
    """
    Wizard operations on draft classes.

    The service is built per request around the request's Session; every
    public method commits or rolls back its own transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    # ----- GETTERS -----

    def get_class(self, class_id: str) -> DanceClass:
        db_class = self.db.get(DanceClass, class_id)
        if db_class is None:
            raise NotFoundError("Class not found")
        return db_class

    def _get_editable(self, class_id: str) -> DanceClass:
        query = select(DanceClass).where(DanceClass.id == class_id, DanceClass.is_active.is_(False))
        db_class = self.db.execute(query).scalar_one_or_none()
        if db_class is None:
            raise NotFoundError("Draft class not found or already active")
        return db_class

    def resume_step(self, class_id: str) -> int:
        return compute_resume_step(self.get_class(class_id))

    # ----- UPSERT -----

    def upsert_draft(self, fields, existing_id: Optional[str] = None) -> DraftResult:
        """
        Persist one wizard step.

        The details step may create the class; the other steps need the id
        returned by an earlier step. Only the fields of the submitted step are
        written.
        """
        if existing_id is None and not isinstance(fields, StepDetailsInput):
            raise ValidationError("class_id is required for this step", field="class_id")

        if isinstance(fields, StepDetailsInput):
            result = self._save_details(fields, existing_id)
        elif isinstance(fields, StepMediaInput):
            result = self._save_media(fields, existing_id)
        elif isinstance(fields, StepScheduleInput):
            result = self._save_schedule(fields, existing_id)
        elif isinstance(fields, StepPricingInput):
            result = self._save_pricing(fields, existing_id)
        else:
            raise ValidationError("Unknown wizard step", field="step")

        self.db.refresh(result.dance_class)
        return result

    def _save_details(self, fields: StepDetailsInput, existing_id: Optional[str]) -> DraftResult:
        with atomic(self.db):
            if existing_id is None:
                db_class = DanceClass(
                    class_name=fields.class_name,
                    class_description=fields.description,
                    course_instructor=fields.instructor_name,
                    image="",
                    overview_video="",
                    schedule=[],
                    class_price=0,
                    is_active=False,
                    is_completed=False,
                    rating=0.0,
                )
                self.db.add(db_class)
                self.db.flush()
                logger.info("Created draft class %s", db_class.id)
            else:
                db_class = self._get_editable(existing_id)
                db_class.class_name = fields.class_name
                db_class.class_description = fields.description
                db_class.course_instructor = fields.instructor_name
        return DraftResult(db_class)

    def _save_media(self, fields: StepMediaInput, existing_id: str) -> DraftResult:
        replaced = []
        with atomic(self.db):
            db_class = self._get_editable(existing_id)
            if fields.image_url:
                if db_class.image and db_class.image != fields.image_url:
                    replaced.append(db_class.image)
                db_class.image = fields.image_url
            if fields.overview_video_url:
                if db_class.overview_video and db_class.overview_video != fields.overview_video_url:
                    replaced.append(db_class.overview_video)
                db_class.overview_video = fields.overview_video_url
        return DraftResult(db_class, replaced)

    def _save_schedule(self, fields: StepScheduleInput, existing_id: str) -> DraftResult:
        with atomic(self.db):
            db_class = self._get_editable(existing_id)
            append_entry(db_class, fields)
        return DraftResult(db_class)

    def _save_pricing(self, fields: StepPricingInput, existing_id: str) -> DraftResult:
        # Price, promotion and both link sets change together or not at all
        with atomic(self.db):
            db_class = self._get_editable(existing_id)

            if fields.promotion_id and self.db.get(Promotion, fields.promotion_id) is None:
                raise ValidationError("Selected promotion not found", field="promotion_id")

            db_class.class_price = fields.class_price
            db_class.promotion_id = fields.promotion_id

            relationship_service.sync_relationships(
                self.db,
                relationship_service.CLASS_MEMBERSHIPS,
                db_class.id,
                db_class.class_name,
                fields.membership_ids,
                relationship_service.membership_name_lookup,
            )
            relationship_service.sync_relationships(
                self.db,
                relationship_service.CLASS_PACKS,
                db_class.id,
                db_class.class_name,
                fields.class_pack_ids,
                relationship_service.class_pack_name_lookup,
            )
        return DraftResult(db_class)

    # ----- LIFECYCLE -----

    def activate(self, class_id: str) -> DanceClass:
        with atomic(self.db):
            db_class = self.get_class(class_id)
            db_class.is_active = True
            db_class.is_completed = True
        logger.info("Activated class %s", class_id)
        return db_class

    def delete_draft(self, class_id: str) -> List[str]:
        """
        Delete an inactive class and return the media URLs it referenced.
        Removing those files from storage is left to the caller.
        """
        with atomic(self.db):
            db_class = self.get_class(class_id)
            if db_class.is_active:
                raise ConflictError("Active classes cannot be deleted; deactivate the class first")
            media_urls = db_class.media_urls()
            self.db.delete(db_class)
        logger.info("Deleted class %s", class_id)
        return media_urls
