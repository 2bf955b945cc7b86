"""
Role and Permission models.

This module defines:
- Permission: a single named capability drawn from ValidPermission
- Role: a flat, seeded grouping of permissions
- role_permissions: many-to-many association between Role and Permission

Roles are not nested. A role grants the union of its permissions and
nothing else.
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gatehouse.models.base import Base
from gatehouse.models.mixins import TimestampMixin

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        Uuid(as_uuid=True),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        Uuid(as_uuid=True),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Permission(Base, TimestampMixin):
    """
    Capability granted through roles.

    Attributes:
        id: UUID primary key
        name: One of the ValidPermission tokens (unique)
        description: Optional free text
    """

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )

    description: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"Permission(id={self.id}, name={self.name})"


class Role(Base, TimestampMixin):
    """
    Named grouping of permissions ("user", "admin", "super-admin").

    Attributes:
        id: UUID primary key
        name: Unique role name
        description: Human-readable description of the role
        permissions: Granted Permission rows

    Relationships are never loaded implicitly; queries join them explicitly.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
    )

    description: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    permissions: Mapped[list[Permission]] = relationship(
        Permission,
        secondary=role_permissions,
        lazy="raise",
        order_by=Permission.name,
    )

    @property
    def permission_names(self) -> frozenset[str]:
        """Names of the granted permissions. Requires permissions to be loaded."""
        return frozenset(permission.name for permission in self.permissions)

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name={self.name})"
