"""
Column permission model — persisted view/edit grant per (role, column).

Rows are seeded from the edit policy on first startup and maintained by
administrators afterwards; the API only reads them.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Integer, String, UniqueConstraint

from ordertrack.db.base import Base
from ordertrack.models.user import Role, RoleType


class ColumnPermission(Base):
    __tablename__ = "column_permissions"
    __table_args__ = (UniqueConstraint("role", "column", name="uq_column_permission_role_column"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    role: Role = Column(RoleType, nullable=False, index=True)  # type: ignore[assignment]
    column: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    can_edit: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    can_view: bool = Column(Boolean, nullable=False, default=True)  # type: ignore[assignment]
