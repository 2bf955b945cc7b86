"""
User model.

Architecture:
- Every user references exactly one Role (many-to-one, required)
- A user may reference one origin Country (many-to-one, optional)
- Deletion is soft: is_active is flipped to False, rows are never removed
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gatehouse.models.base import Base
from gatehouse.models.country import Country
from gatehouse.models.mixins import TimestampMixin
from gatehouse.models.role import Role


class User(Base, TimestampMixin):
    """
    User identity record.

    Attributes:
        id: UUID primary key (immutable)
        email: Unique email address
        full_name: Display name, matched exactly by name lookups
        password_hash: Argon2id hash (write-only, never serialized)
        is_active: False marks a soft-deleted user
        role_id: Foreign key to roles (required)
        country_id: Foreign key to countries (optional)
        created_at: When the account was created
        updated_at: When the account was last updated

    Relationships:
        role, country: declared lazy="raise"; repositories populate them with
        explicit joins and contains_eager().
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    country_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("countries.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    role: Mapped[Role] = relationship(Role, lazy="raise")
    country: Mapped[Optional[Country]] = relationship(Country, lazy="raise")

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, active={self.is_active})"
