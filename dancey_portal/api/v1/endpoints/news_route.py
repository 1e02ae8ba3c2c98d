# dancey_portal/api/v1/endpoints/news_route.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dancey_portal.api.auth.auth import has_roles
from dancey_portal.api.deps import get_db, get_storage_service
from dancey_portal.crud import news_crud
from dancey_portal.exceptions import NotFoundError, warn_partial_side_effect
from dancey_portal.schemas import news_schema
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.service_helper import build_pagination
from dancey_portal.services.storage_service import S3StorageService

router = APIRouter()

ADMIN_ACCESS = has_roles(["admin", "super_admin"])


def _get_or_404(db: Session, news_id: str):
    db_news = news_crud.get_news(db, news_id)
    if db_news is None:
        raise NotFoundError("News not found")
    return db_news


@router.get("", response_model=news_schema.NewsListResponse, summary="List news")
def get_news_list(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[Literal["published", "draft"]] = Query(None, alias="status"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Pinned news first, newest first.

    Access: **admin**, **super_admin**
    """
    news, total = news_crud.get_all_news(
        db, page=page, limit=limit, status=status_filter, category=category, search=search
    )
    published, draft = news_crud.count_by_status(db)
    return news_schema.NewsListResponse(
        news=news,
        pagination=build_pagination(page, limit, total),
        published_count=published,
        draft_count=draft,
    )


@router.post("", response_model=news_schema.News, status_code=status.HTTP_201_CREATED, summary="Create news")
def create_news(
    news_in: news_schema.NewsCreate,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return news_crud.create_news(db, news_in)


@router.get("/{news_id}", response_model=news_schema.News, summary="Get news")
def get_news(
    news_id: str,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return _get_or_404(db, news_id)


@router.put("/{news_id}", response_model=news_schema.News, summary="Update news")
def update_news(
    news_id: str,
    news_update: news_schema.NewsUpdate,
    db: Session = Depends(get_db),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Partial update. A replaced image is removed from storage.

    Access: **admin**, **super_admin**
    """
    db_news = _get_or_404(db, news_id)
    old_image = db_news.image_url
    db_news = news_crud.update_news(db, db_news, news_update)
    if old_image and old_image != db_news.image_url:
        result = storage.delete([old_image])
        if result.failed:
            warn_partial_side_effect("could not delete replaced news image %s", old_image)
    return db_news


@router.patch("/{news_id}/pin", response_model=news_schema.News, summary="Pin or unpin news")
def pin_news(
    news_id: str,
    body: news_schema.NewsPin,
    db: Session = Depends(get_db),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    return news_crud.set_pinned(db, _get_or_404(db, news_id), body.is_pinned)


@router.delete("/{news_id}", response_model=dict, summary="Delete news")
def delete_news(
    news_id: str,
    db: Session = Depends(get_db),
    storage: S3StorageService = Depends(get_storage_service),
    current_admin: AuthenticatedAdmin = Depends(ADMIN_ACCESS)
):
    """
    Delete the news item, then its image.

    Access: **admin**, **super_admin**
    """
    db_news = _get_or_404(db, news_id)
    image_url = db_news.image_url
    news_crud.delete_news(db, db_news)

    image_deleted = True
    if image_url:
        result = storage.delete([image_url])
        if result.failed:
            image_deleted = False
            warn_partial_side_effect("could not delete news image %s", image_url)
    return {"success": True, "message": "News deleted successfully", "image_deleted": image_deleted}
