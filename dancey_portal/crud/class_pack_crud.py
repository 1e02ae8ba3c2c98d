from sqlalchemy.orm import Session
from sqlalchemy import select, func
from typing import List, Optional, Tuple

from dancey_portal.models.class_pack_model import ClassPack
from dancey_portal.models.class_model import DanceClass
from dancey_portal.models.association_tables import ClassPackClass
from dancey_portal.schemas.class_pack_schema import ClassPackView, PackClass
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset


def get_pack_classes(db: Session, pack_id: str) -> List[PackClass]:
    query = (
        select(DanceClass)
        .join(ClassPackClass, ClassPackClass.class_id == DanceClass.id)
        .where(ClassPackClass.class_pack_id == pack_id)
        .order_by(DanceClass.class_name)
    )
    return [PackClass.model_validate(c) for c in db.execute(query).scalars().all()]


def to_view(db: Session, pack: ClassPack) -> ClassPackView:
    classes = get_pack_classes(db, pack.id)
    return ClassPackView(
        id=pack.id,
        pack_name=pack.pack_name,
        is_active=pack.is_active,
        price=pack.price if pack.price is not None else 0,
        created_at=pack.created_at,
        class_count=len(classes),
        classes=classes,
    )


def get_class_pack(db: Session, pack_id: str) -> Optional[ClassPack]:
    return db.get(ClassPack, pack_id)


def get_all_class_packs(
    db: Session,
    page: int = 1,
    limit: int = 10,
    search: Optional[str] = None,
    status: str = "all",
) -> Tuple[List[ClassPackView], int]:
    query = select(ClassPack)

    pattern = like_pattern(search)
    if pattern:
        query = query.where(func.lower(ClassPack.pack_name).like(pattern))
    if status == "active":
        query = query.where(ClassPack.is_active.is_(True))
    elif status == "inactive":
        query = query.where(ClassPack.is_active.is_(False))

    total = count_rows(db, query)
    query = query.order_by(ClassPack.created_at.desc()).offset(page_offset(page, limit)).limit(limit)
    packs = db.execute(query).scalars().all()
    return [to_view(db, pack) for pack in packs], total


