import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, Integer, String, UniqueConstraint

from charter.models.base import Base


class AppRole(enum.Enum):
    ADMIN = "admin"
    USER = "user"


class UserRoleAssignment(Base):
    """Role granted to a subject of the external identity provider."""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    role = Column(Enum(AppRole), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
