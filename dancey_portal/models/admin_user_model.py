from sqlalchemy import Column, String, DateTime, Enum
from passlib.context import CryptContext
import enum

from dancey_portal.models.base_model import Base, new_uuid, utc_now

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password.encode("utf-8")[:72])


def check_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password.encode("utf-8")[:72], password_hash)


class AdminRole(str, enum.Enum):
    admin = "admin"
    super_admin = "super_admin"


class AdminStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"


class AdminUser(Base):
    """
    Model for the admin_users table (people who log into the portal).
    """
    __tablename__ = "admin_users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    phone_number = Column(String(15))
    role = Column(Enum(AdminRole, name="admin_role_enum"), default=AdminRole.admin, nullable=False)
    status = Column(Enum(AdminStatus, name="admin_status_enum"), default=AdminStatus.active, nullable=False)
    img_url = Column(String(500))
    last_login = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<AdminUser(id='{self.id}', email='{self.email}', role={self.role})>"

    def verify_password(self, plain_password: str) -> bool:
        return check_password(plain_password, self.password)

    def set_password(self, plain_password: str):
        self.password = hash_password(plain_password)
