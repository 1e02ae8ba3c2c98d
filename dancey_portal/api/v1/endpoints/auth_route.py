# dancey_portal/api/v1/endpoints/auth_route.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from dancey_portal.api.deps import get_db
from dancey_portal.api.auth.auth import create_access_token, get_current_admin
from dancey_portal.models.admin_user_model import AdminStatus, AdminUser
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin, LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse, summary="Admin login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    logger.info("Attempting login for %s", data.email)

    admin = db.execute(select(AdminUser).where(AdminUser.email == data.email.lower())).scalar_one_or_none()
    if not admin or not admin.verify_password(data.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    if admin.status != AdminStatus.active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")

    admin.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(admin)

    access_token = create_access_token({"sub": admin.id, "role": admin.role.value})
    logger.info("Login successful for %s", admin.email)
    return TokenResponse(
        access_token=access_token,
        admin=AuthenticatedAdmin(
            id=admin.id,
            name=admin.name,
            email=admin.email,
            role=admin.role.value,
            status=admin.status.value,
            img_url=admin.img_url,
            last_login=admin.last_login,
        ),
    )


@router.get("/me", response_model=AuthenticatedAdmin, summary="Current admin")
def read_me(current_admin: AuthenticatedAdmin = Depends(get_current_admin)):
    return current_admin
