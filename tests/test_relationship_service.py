from decimal import Decimal

import pytest
from sqlalchemy import func, select

from conftest import add_class, add_membership
from dancey_portal.database import atomic
from dancey_portal.exceptions import ValidationError
from dancey_portal.models.association_tables import ClassMembership, ClassPackClass
from dancey_portal.models.class_pack_model import ClassPack
from dancey_portal.services import relationship_service
from dancey_portal.services.relationship_service import (
    CLASS_MEMBERSHIPS,
    PACK_CLASSES,
    get_child_ids,
    membership_name_lookup,
    class_name_lookup,
    recompute_price,
    sync_relationships,
)


def _sync_memberships(db, class_id, class_name, ids):
    with atomic(db):
        return sync_relationships(db, CLASS_MEMBERSHIPS, class_id, class_name, ids, membership_name_lookup)


# ----- sync_relationships -----

def test_sync_replaces_the_whole_set(db):
    db_class = add_class(db, active=False)
    m1, m2, m3 = (add_membership(db, name=n) for n in ("Basic", "Plus", "Pro"))

    assert _sync_memberships(db, db_class.id, db_class.class_name, [m1.id, m2.id]) is True
    assert _sync_memberships(db, db_class.id, db_class.class_name, [m3.id, m2.id, m3.id]) is True

    assert sorted(get_child_ids(db, CLASS_MEMBERSHIPS, db_class.id)) == sorted([m2.id, m3.id])


def test_sync_stores_display_names(db):
    db_class = add_class(db, name="Tango", active=False)
    membership = add_membership(db, name="Gold")

    _sync_memberships(db, db_class.id, db_class.class_name, [membership.id])

    row = db.execute(select(ClassMembership)).scalar_one()
    assert (row.class_name, row.membership_name) == ("Tango", "Gold")


def test_sync_reports_no_change_for_reordered_set(db):
    db_class = add_class(db, active=False)
    m1, m2 = add_membership(db, name="Basic"), add_membership(db, name="Plus")

    _sync_memberships(db, db_class.id, db_class.class_name, [m1.id, m2.id])

    assert _sync_memberships(db, db_class.id, db_class.class_name, [m2.id, m1.id, m2.id]) is False
    assert sorted(get_child_ids(db, CLASS_MEMBERSHIPS, db_class.id)) == sorted([m1.id, m2.id])


def test_sync_to_empty_set_removes_rows(db):
    db_class = add_class(db, active=False)
    membership = add_membership(db)
    _sync_memberships(db, db_class.id, db_class.class_name, [membership.id])

    assert _sync_memberships(db, db_class.id, db_class.class_name, []) is True
    assert get_child_ids(db, CLASS_MEMBERSHIPS, db_class.id) == []


def test_sync_with_unknown_id_writes_nothing(db):
    db_class = add_class(db, active=False)
    membership = add_membership(db)
    _sync_memberships(db, db_class.id, db_class.class_name, [membership.id])

    with pytest.raises(ValidationError) as exc_info:
        _sync_memberships(db, db_class.id, db_class.class_name, ["unknown"])

    assert exc_info.value.field == "membership_id"
    assert get_child_ids(db, CLASS_MEMBERSHIPS, db_class.id) == [membership.id]


def test_failed_sync_rolls_back_parent_insert(db):
    salsa = add_class(db, name="Salsa")

    with pytest.raises(ValidationError):
        with atomic(db):
            pack = ClassPack(pack_name="Broken", price=Decimal("10"))
            db.add(pack)
            db.flush()
            sync_relationships(db, PACK_CLASSES, pack.id, pack.pack_name, [salsa.id, "nope"], class_name_lookup)

    assert db.execute(select(func.count(ClassPack.id))).scalar_one() == 0
    assert db.execute(select(func.count(ClassPackClass.id))).scalar_one() == 0


# ----- recompute_price -----

@pytest.mark.parametrize(
    "enabled, percent, expected",
    [
        (False, None, Decimal("30.00")),
        (True, 25, Decimal("22.50")),
        (True, 150, Decimal("0.00")),
    ],
)
def test_recompute_price(enabled, percent, expected):
    assert recompute_price([10, 20], enabled, percent) == expected


def test_recompute_price_ignores_discount_when_disabled():
    assert recompute_price([Decimal("19.99")], False, 50) == Decimal("19.99")


def test_recompute_price_treats_missing_prices_as_zero():
    assert recompute_price([None, Decimal("12.50")], True, -10) == Decimal("12.50")


def test_recompute_price_rounds_half_up():
    assert recompute_price([Decimal("0.05")], True, 50) == Decimal("0.03")


def test_get_class_prices(db):
    a = add_class(db, name="A", price="10.00")
    b = add_class(db, name="B", price="20.00")
    prices = relationship_service.get_class_prices(db, [a.id, b.id])
    assert sorted(prices) == [Decimal("10.00"), Decimal("20.00")]
