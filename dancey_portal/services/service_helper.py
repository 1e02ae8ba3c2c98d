import math
import re
import secrets
import string
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from dancey_portal.exceptions import ValidationError
from dancey_portal.schemas.common_schema import Pagination


def build_pagination(page: int, limit: int, total_items: int) -> Pagination:
    total_pages = math.ceil(total_items / limit) if limit else 0
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=limit,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def count_rows(db: Session, query) -> int:
    """Count the rows a select() would return, ignoring its ordering."""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    return db.execute(count_query).scalar_one()


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def like_pattern(search: Optional[str]) -> Optional[str]:
    if not search or not search.strip():
        return None
    return f"%{search.strip().lower()}%"


def parse_money(raw, field: str) -> Decimal:
    """
    Read an amount typed by an admin, e.g. "$30/month" or "30.5".
    Everything except digits and the decimal point is dropped.
    """
    cleaned = re.sub(r"[^0-9.]", "", str(raw))
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number", field=field)
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than 0", field=field)
    return amount.quantize(Decimal("0.01"))


def generate_password(length: int = 12) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))
