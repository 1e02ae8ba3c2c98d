from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
from typing import List, Optional, Tuple

from dancey_portal.models.admin_user_model import AdminUser, AdminStatus
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset


def get_admin(db: Session, admin_id: str) -> Optional[AdminUser]:
    return db.get(AdminUser, admin_id)


def get_admin_by_email(db: Session, email: str, exclude_id: Optional[str] = None) -> Optional[AdminUser]:
    query = select(AdminUser).where(func.lower(AdminUser.email) == email.lower())
    if exclude_id:
        query = query.where(AdminUser.id != exclude_id)
    return db.execute(query).scalars().first()


def get_all_admins(
    db: Session, page: int = 1, limit: int = 10, search: Optional[str] = None
) -> Tuple[List[AdminUser], int]:
    query = select(AdminUser)
    pattern = like_pattern(search)
    if pattern:
        query = query.where(
            or_(
                func.lower(AdminUser.name).like(pattern),
                func.lower(AdminUser.email).like(pattern),
                func.lower(AdminUser.phone_number).like(pattern),
            )
        )
    total = count_rows(db, query)
    query = query.order_by(AdminUser.created_at.desc()).offset(page_offset(page, limit)).limit(limit)
    return list(db.execute(query).scalars().all()), total


def count_by_status(db: Session) -> Tuple[int, int]:
    """Number of (active, inactive) admins."""
    rows = db.execute(select(AdminUser.status, func.count(AdminUser.id)).group_by(AdminUser.status)).all()
    counts = {row[0]: row[1] for row in rows}
    return counts.get(AdminStatus.active, 0), counts.get(AdminStatus.inactive, 0)


def delete_admin(db: Session, db_admin: AdminUser) -> None:
    db.delete(db_admin)
    db.commit()
