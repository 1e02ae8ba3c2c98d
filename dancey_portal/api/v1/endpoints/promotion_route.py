# dancey_portal/api/v1/endpoints/promotion_route.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db
from dancey_portal.crud import promotion_crud
from dancey_portal.exceptions import NotFoundError
from dancey_portal.schemas import promotion_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services import promotion_service
from dancey_portal.services.service_helper import build_pagination

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


def _get_or_404(db: Session, promotion_id: str):
    db_promotion = promotion_crud.get_promotion(db, promotion_id)
    if db_promotion is None:
        raise NotFoundError("Promotion not found")
    return db_promotion


@router.get("", response_model=promotion_schema.PromotionListResponse, summary="List promotions")
def get_promotions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    promotions, total = promotion_crud.get_all_promotions(db, page=page, limit=limit, search=search)
    return promotion_schema.PromotionListResponse(promotions=promotions, pagination=build_pagination(page, limit, total))


@router.post(
    "",
    response_model=promotion_schema.Promotion,
    status_code=status.HTTP_201_CREATED,
    summary="Create a promotion"
)
def create_promotion(
    promotion_in: promotion_schema.PromotionCreate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    `discount` is a percentage such as "15" or "12.5%". Dates cannot be in the past.

    Access: **admin**, **super_admin**
    """
    return promotion_crud.create_promotion(db, promotion_in)


@router.get("/{promotion_id}", response_model=promotion_schema.Promotion, summary="Get a promotion")
def get_promotion(
    promotion_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return _get_or_404(db, promotion_id)


@router.put("/{promotion_id}", response_model=promotion_schema.Promotion, summary="Update a promotion")
def update_promotion(
    promotion_id: str,
    promotion_update: promotion_schema.PromotionUpdate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    db_promotion = _get_or_404(db, promotion_id)
    return promotion_service.update_promotion(db, db_promotion, promotion_update)


@router.delete("/{promotion_id}", response_model=dict, summary="Delete a promotion")
def delete_promotion(
    promotion_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    promotion_crud.delete_promotion(db, _get_or_404(db, promotion_id))
    return {"success": True, "message": "Promotion deleted successfully"}
