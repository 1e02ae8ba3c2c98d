from sqlalchemy.orm import Session
from sqlalchemy import select, func
from typing import List, Optional, Tuple

from dancey_portal.models.membership_model import Membership, MembershipStatus
from dancey_portal.schemas import membership_schema
from dancey_portal.services.service_helper import count_rows, like_pattern, page_offset, parse_money


def to_view(membership: Membership) -> membership_schema.Membership:
    return membership_schema.Membership(
        id=membership.id,
        membership_name=membership.membership_name,
        price_per_month=f"${membership.price_per_month:.2f}/month",
        price_value=membership.price_per_month,
        status=membership.status.value,
        enabled=membership.status == MembershipStatus.Active,
        created_at=membership.created_at,
        updated_at=membership.updated_at,
    )


def get_membership(db: Session, membership_id: str) -> Optional[Membership]:
    return db.get(Membership, membership_id)


def get_all_memberships(
    db: Session, page: int = 1, limit: int = 10, search: Optional[str] = None
) -> Tuple[List[Membership], int]:
    query = select(Membership)
    pattern = like_pattern(search)
    if pattern:
        query = query.where(func.lower(Membership.membership_name).like(pattern))
    total = count_rows(db, query)
    query = query.order_by(Membership.created_at.desc()).offset(page_offset(page, limit)).limit(limit)
    return list(db.execute(query).scalars().all()), total


def create_membership(db: Session, membership_in: membership_schema.MembershipCreate) -> Membership:
    status = MembershipStatus(membership_in.status)
    db_membership = Membership(
        membership_name=membership_in.membership_name.strip(),
        price_per_month=parse_money(membership_in.price_per_month, "price_per_month"),
        status=status,
        is_membership_enabled=status == MembershipStatus.Active,
    )
    db.add(db_membership)
    db.commit()
    db.refresh(db_membership)
    return db_membership


def update_membership(db: Session, db_membership: Membership, membership_update: membership_schema.MembershipUpdate) -> Membership:
    update_data = membership_update.model_dump(exclude_unset=True, exclude_none=True)
    if "price_per_month" in update_data:
        update_data["price_per_month"] = parse_money(update_data["price_per_month"], "price_per_month")
    if "status" in update_data:
        update_data["status"] = MembershipStatus(update_data["status"])
        update_data["is_membership_enabled"] = update_data["status"] == MembershipStatus.Active
    for key, value in update_data.items():
        setattr(db_membership, key, value)
    db.commit()
    db.refresh(db_membership)
    return db_membership


def set_membership_enabled(db: Session, db_membership: Membership, enabled: bool) -> Membership:
    db_membership.status = MembershipStatus.Active if enabled else MembershipStatus.Inactive
    db_membership.is_membership_enabled = enabled
    db.commit()
    db.refresh(db_membership)
    return db_membership


def delete_membership(db: Session, db_membership: Membership) -> None:
    db.delete(db_membership)
    db.commit()
