"""
Seed run response schema.
"""

from pydantic import BaseModel, Field


class SeedResponse(BaseModel):
    """Acknowledgement of a seed run with the number of rows it inserted."""

    message: str = Field(default="Seed executed")
    permissions_created: int = Field(ge=0)
    roles_created: int = Field(ge=0)
    countries_created: int = Field(ge=0)
