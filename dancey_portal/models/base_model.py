# dancey_portal/models/base_model.py
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """
    Declarative base for every SQLAlchemy 2.0 model of the portal.
    """
    pass


def new_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
