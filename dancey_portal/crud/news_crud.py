from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from typing import List, Optional, Tuple

from dancey_portal.models.news_model import News, NewsStatus
from dancey_portal.schemas.news_schema import NewsCreate, NewsUpdate
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset


def get_news(db: Session, news_id: str) -> Optional[News]:
    return db.get(News, news_id)


def get_all_news(
    db: Session,
    page: int = 1,
    limit: int = 10,
    status: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> Tuple[List[News], int]:
    query = select(News)
    if status:
        query = query.where(News.status == NewsStatus(status))
    if category:
        query = query.where(News.category == category)
    pattern = like_pattern(search)
    if pattern:
        query = query.where(or_(func.lower(News.title).like(pattern), func.lower(News.content).like(pattern)))

    total = count_rows(db, query)
    query = (
        query.order_by(News.is_pinned.desc(), News.created_at.desc())
        .offset(page_offset(page, limit))
        .limit(limit)
    )
    return list(db.execute(query).scalars().all()), total


def count_by_status(db: Session) -> Tuple[int, int]:
    """Number of (published, draft) news."""
    rows = db.execute(select(News.status, func.count(News.id)).group_by(News.status)).all()
    counts = {row[0]: row[1] for row in rows}
    return counts.get(NewsStatus.published, 0), counts.get(NewsStatus.draft, 0)


def create_news(db: Session, news_in: NewsCreate) -> News:
    data = news_in.model_dump()
    data["status"] = NewsStatus(data["status"])
    db_news = News(**data)
    db.add(db_news)
    db.commit()
    db.refresh(db_news)
    return db_news


def update_news(db: Session, db_news: News, news_update: NewsUpdate) -> News:
    update_data = news_update.model_dump(exclude_unset=True)
    if update_data.get("status") is not None:
        update_data["status"] = NewsStatus(update_data["status"])
    for key, value in update_data.items():
        if value is None and key in ("title", "content", "status", "is_pinned"):
            continue
        setattr(db_news, key, value)
    db.commit()
    db.refresh(db_news)
    return db_news


def set_pinned(db: Session, db_news: News, is_pinned: bool) -> News:
    db_news.is_pinned = is_pinned
    db.commit()
    db.refresh(db_news)
    return db_news


def delete_news(db: Session, db_news: News) -> None:
    db.delete(db_news)
    db.commit()
