# dancey_portal/api/deps.py
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from dancey_portal.database import SessionLocal
from dancey_portal.services.class_draft_service import ClassDraftService
from dancey_portal.services.identity_service import FirebaseIdentityService, identity_service
from dancey_portal.services.storage_service import S3StorageService, storage_service


def get_db() -> Generator[Session, None, None]:
    """Database session for one request, closed on every exit path."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_identity_service() -> FirebaseIdentityService:
    return identity_service


def get_storage_service() -> S3StorageService:
    return storage_service


def get_class_draft_service(db: Session = Depends(get_db)) -> ClassDraftService:
    return ClassDraftService(db)
