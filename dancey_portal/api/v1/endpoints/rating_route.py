# dancey_portal/api/v1/endpoints/rating_route.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import rating_crud
from dancey_portal.exceptions import NotFoundError
from dancey_portal.schemas import rating_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


@router.get("", response_model=rating_schema.RatingListResponse, summary="List ratings for review")
def get_ratings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[Literal["pending", "approved", "rejected"]] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    ratings, total = rating_crud.get_all_ratings(db, page=page, limit=limit, status=status_filter)
    return rating_schema.RatingListResponse(ratings=ratings, pagination=build_pagination(page, limit, total))


@router.patch("/{rating_id}", response_model=rating_schema.RatingView, summary="Approve or reject a rating")
def update_rating_status(
    rating_id: str,
    body: rating_schema.RatingStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Only approved ratings are shown to app users.

    Access: **admin**, **super_admin**
    """
    db_rating = rating_crud.get_rating(db, rating_id)
    if db_rating is None:
        raise NotFoundError("Rating not found")
    return rating_crud.set_rating_status(db, db_rating, body.status)


@router.get("/class/{class_id}", response_model=rating_schema.ClassRatingsResponse, summary="Approved ratings of a class")
def get_class_ratings(
    class_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    ratings = rating_crud.get_approved_class_ratings(db, class_id)
    average = round(sum(r.rating for r in ratings) / len(ratings), 1) if ratings else 0.0
    return rating_schema.ClassRatingsResponse(
        class_id=class_id,
        ratings=ratings,
        average_rating=average,
        total_ratings=len(ratings),
    )
