"""
Country reference model.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from gatehouse.models.base import Base


class Country(Base):
    """
    Origin country of a user. Reference data populated by the seed.

    Attributes:
        id: UUID primary key
        name: Unique country name
    """

    __tablename__ = "countries"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"Country(id={self.id}, name={self.name})"
