# dancey_portal/services/class_pack_service.py
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from dancey_portal.crud import class_pack_crud
from dancey_portal.database import atomic
from dancey_portal.exceptions import NotFoundError
from dancey_portal.models.class_pack_model import ClassPack
from dancey_portal.schemas.class_pack_schema import ClassPackCreate, ClassPackUpdate, ClassPackView
from dancey_portal.services.relationship_service import (
    PACK_CLASSES,
    class_name_lookup,
    get_class_prices,
    recompute_price,
    sync_relationships,
)

logger = logging.getLogger(__name__)


def _price_for(db: Session, class_ids, discount_enabled: bool, discount_percent):
    unique_ids = list(dict.fromkeys(class_ids))
    return recompute_price(get_class_prices(db, unique_ids), discount_enabled, discount_percent)


def create_class_pack(db: Session, pack_in: ClassPackCreate) -> ClassPackView:
    """
    Create a pack and link its classes in one transaction.
    The price comes from the selected classes and the optional discount.
    """
    with atomic(db):
        # 1. Price from the selected classes
        price = _price_for(db, pack_in.class_ids, pack_in.is_discount_enabled, pack_in.discount_percent)

        # 2. Pack row
        pack = ClassPack(pack_name=pack_in.pack_name, is_active=pack_in.is_active, price=price)
        db.add(pack)
        db.flush()

        # 3. Links; an unknown class id aborts the whole pack
        sync_relationships(db, PACK_CLASSES, pack.id, pack.pack_name, pack_in.class_ids, class_name_lookup)

    logger.info("Created class pack %s with price %s", pack.id, price)
    return class_pack_crud.to_view(db, pack)


def update_class_pack(db: Session, pack_id: str, pack_in: ClassPackUpdate) -> Tuple[ClassPackView, bool]:
    """
    Replace name, active flag and classes of a pack.

    The price is recomputed only when the set of classes changed; otherwise
    the stored price is kept even if discount values were sent again.
    """
    with atomic(db):
        pack = db.get(ClassPack, pack_id)
        if pack is None:
            raise NotFoundError("Class pack not found")

        pack.pack_name = pack_in.pack_name
        pack.is_active = pack_in.is_active

        changed = sync_relationships(db, PACK_CLASSES, pack.id, pack.pack_name, pack_in.class_ids, class_name_lookup)
        if changed:
            pack.price = _price_for(db, pack_in.class_ids, pack_in.is_discount_enabled, pack_in.discount_percent)
            logger.info("Class pack %s members changed, price now %s", pack.id, pack.price)

    return class_pack_crud.to_view(db, pack), changed


def delete_class_pack(db: Session, pack_id: str) -> None:
    pack = class_pack_crud.get_class_pack(db, pack_id)
    if pack is None:
        raise NotFoundError("Class pack not found")
    with atomic(db):
        db.delete(pack)
