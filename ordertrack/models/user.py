"""
User model — authentication & role-based access control.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, String, Text

from ordertrack.db.base import Base


class Role(str, enum.Enum):
    BEHEERDER = "BEHEERDER"  # administrator
    PLANNER = "PLANNER"
    SALES = "SALES"
    SCANNER = "SCANNER"
    GUEST = "GUEST"


RoleType = Enum(Role, name="role", native_enum=False, length=20)


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id: str = Column(String(36), primary_key=True, default=new_id)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    hashed_password: str = Column(String(128), nullable=False)  # type: ignore[assignment]
    name: str | None = Column(String(200), nullable=True)  # type: ignore[assignment]
    role: Role = Column(RoleType, nullable=False, default=Role.GUEST)  # type: ignore[assignment]
    # Serialized JSON as written by POST /settings; may be absent or corrupt
    settings: str | None = Column(Text, nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
