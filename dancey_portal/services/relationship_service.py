# dancey_portal/services/relationship_service.py
"""
Replacement of join-table rows for a parent entity and the derived bundle price.

`sync_relationships` always rewrites the full row set of a parent (delete all,
insert each desired child) and reports whether the member *set* changed. It does
not commit; callers run it inside `atomic(db)` together with the rest of their
statements so an unresolvable child id rolls the whole sequence back.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Type

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from dancey_portal.exceptions import ValidationError
from dancey_portal.models.association_tables import ClassMembership, ClassPackClass, InstructorClass
from dancey_portal.models.class_model import DanceClass
from dancey_portal.models.class_pack_model import ClassPack
from dancey_portal.models.membership_model import Membership

logger = logging.getLogger(__name__)

DisplayNameLookup = Callable[[Session, Sequence[str]], Dict[str, str]]

TWO_PLACES = Decimal("0.01")


# ----- JOIN TABLE DESCRIPTIONS -----

@dataclass(frozen=True)
class JoinTableLink:
    """Which columns of a join model play the parent and child roles."""
    model: Type
    parent_key: str
    child_key: str
    parent_name_key: str
    child_name_key: str
    child_label: str

    def parent_column(self):
        return getattr(self.model, self.parent_key)

    def child_column(self):
        return getattr(self.model, self.child_key)


PACK_CLASSES = JoinTableLink(ClassPackClass, "class_pack_id", "class_id", "pack_name", "class_name", "classes")
CLASS_PACKS = JoinTableLink(ClassPackClass, "class_id", "class_pack_id", "class_name", "pack_name", "class packs")
CLASS_MEMBERSHIPS = JoinTableLink(ClassMembership, "class_id", "membership_id", "class_name", "membership_name", "memberships")
INSTRUCTOR_CLASSES = JoinTableLink(InstructorClass, "instructor_id", "class_id", "instructor_name", "class_name", "classes")


# ----- DISPLAY NAME LOOKUPS -----

def _name_lookup(model, name_column) -> DisplayNameLookup:
    def lookup(db: Session, ids: Sequence[str]) -> Dict[str, str]:
        if not ids:
            return {}
        rows = db.execute(select(model.id, name_column).where(model.id.in_(list(ids)))).all()
        return {row[0]: row[1] for row in rows}
    return lookup


class_name_lookup = _name_lookup(DanceClass, DanceClass.class_name)
class_pack_name_lookup = _name_lookup(ClassPack, ClassPack.pack_name)
membership_name_lookup = _name_lookup(Membership, Membership.membership_name)


# ----- SYNCHRONIZER -----

def get_child_ids(db: Session, link: JoinTableLink, parent_id: str) -> List[str]:
    query = select(link.child_column()).where(link.parent_column() == parent_id)
    return list(db.execute(query).scalars().all())


def sync_relationships(
    db: Session,
    link: JoinTableLink,
    parent_id: str,
    parent_name: str,
    desired_child_ids: Iterable[str],
    display_name_lookup: DisplayNameLookup,
) -> bool:
    """
    Make the join rows of `parent_id` exactly `desired_child_ids`.

    Returns True when the stored set of children differs from the desired one
    (order and duplicates are ignored). Raises ValidationError when any desired
    id does not resolve to an existing child; nothing is written in that case.
    """
    # 1. De-duplicate while keeping submission order
    desired = list(dict.fromkeys(desired_child_ids))

    # 2. Compare as sets
    current = set(get_child_ids(db, link, parent_id))
    changed = current != set(desired)

    # 3. Resolve every child before touching the table
    names = display_name_lookup(db, desired)
    missing = [child_id for child_id in desired if child_id not in names]
    if missing:
        logger.info("Unresolvable %s for parent %s: %s", link.child_label, parent_id, missing)
        raise ValidationError(f"Some selected {link.child_label} not found", field=link.child_key)

    # 4. Delete all, insert each
    db.execute(delete(link.model).where(link.parent_column() == parent_id))
    for child_id in desired:
        db.add(link.model(**{
            link.parent_key: parent_id,
            link.child_key: child_id,
            link.parent_name_key: parent_name,
            link.child_name_key: names[child_id],
        }))
    db.flush()

    logger.debug("Synced %s for %s (changed=%s)", link.child_label, parent_id, changed)
    return changed


# ----- PRICE -----

def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def recompute_price(
    unit_prices: Iterable[Optional[float]],
    discount_enabled: bool,
    discount_percent: Optional[float],
) -> Decimal:
    """
    Bundle price: sum of member prices minus the discount, rounded to 2 places
    and never below zero. The discount is clamped to [0, 100] and ignored when
    disabled.
    """
    total = sum((_to_decimal(price) for price in unit_prices), Decimal("0"))

    discount = Decimal("0")
    if discount_enabled:
        discount = min(Decimal("100"), max(Decimal("0"), _to_decimal(discount_percent)))

    price = (total * (Decimal("1") - discount / Decimal("100"))).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return max(price, Decimal("0.00"))


def get_class_prices(db: Session, class_ids: Sequence[str]) -> List[Decimal]:
    if not class_ids:
        return []
    query = select(DanceClass.class_price).where(DanceClass.id.in_(list(class_ids)))
    return list(db.execute(query).scalars().all())
