# dancey_portal/api/auth/auth.py
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from dancey_portal.api.deps import get_db
from dancey_portal.config import ACCESS_TOKEN_EXPIRE_MINUTES, SECRET_KEY
from dancey_portal.models.admin_user_model import AdminStatus, AdminUser
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin, TokenData

ALGORITHM = "HS256"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


def create_access_token(data: Dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> TokenData:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        admin_id = payload.get("sub")
        if admin_id is None:
            raise credentials_exception
        return TokenData(admin_id=admin_id)
    except JWTError:
        raise credentials_exception


def get_current_admin(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> AuthenticatedAdmin:
    token_data = verify_token(token)
    admin = db.get(AdminUser, token_data.admin_id)
    if admin is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin not found")
    if admin.status != AdminStatus.active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")
    return AuthenticatedAdmin(
        id=admin.id,
        name=admin.name,
        email=admin.email,
        role=admin.role.value,
        status=admin.status.value,
        img_url=admin.img_url,
        last_login=admin.last_login,
    )


def has_roles(required_roles: List[str]):
    """
    Dependency factory checking the logged-in admin's role.
    """
    def role_checker(current_admin: AuthenticatedAdmin = Depends(get_current_admin)):
        if current_admin.role not in required_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action."
            )
        return current_admin
    return role_checker
