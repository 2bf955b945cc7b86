"""
Seed API route.

- POST /api/v1/seed - Insert reference permissions, roles and countries (write)
"""

from fastapi import APIRouter

from gatehouse.api.dependencies import SeedServiceDep, WriteUser
from gatehouse.schemas.seed import SeedResponse

router = APIRouter(prefix="/seed", tags=["Seed"])


@router.post(
    "",
    response_model=SeedResponse,
    summary="Run seed",
    description="A user with write permission can seed permissions, roles and countries",
    responses={
        401: {"description": "Unauthorized, token not valid"},
        403: {"description": "Forbidden, missing permission"},
    },
)
async def run_seed(
    current_user: WriteUser,
    seed_service: SeedServiceDep,
) -> SeedResponse:
    """Insert missing reference rows. Existing rows are left untouched."""
    return await seed_service.run_seed()
