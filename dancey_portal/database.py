# dancey_portal/database.py
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from dancey_portal.config import DATABASE_URL
from dancey_portal.exceptions import StoreUnavailable
from dancey_portal.models.base_model import Base

logger = logging.getLogger(__name__)

engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a block of statements as one transaction.

    Commits when the block finishes, rolls back on any exception and re-raises it.
    Connection-level failures are re-raised as StoreUnavailable.
    """
    try:
        yield db
        db.commit()
    except (OperationalError, InterfaceError) as e:
        db.rollback()
        logger.error("Database unavailable: %s", e, exc_info=True)
        raise StoreUnavailable() from e
    except Exception:
        db.rollback()
        raise


__all__ = ["Base", "engine", "SessionLocal", "atomic"]
