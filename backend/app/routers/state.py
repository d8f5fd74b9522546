"""Public contest state: config, players and games."""

from fastapi import APIRouter, Depends

from app.services.auth_service import is_admin_request
from app.services.contest_service import ContestService, get_contest_service

router = APIRouter(prefix="/api", tags=["state"])


@router.get("/state")
async def get_state(
    admin: bool = Depends(is_admin_request),
    service: ContestService = Depends(get_contest_service),
):
    """Return the contest state. While the site is locked only admins see it."""
    return await service.get_state(admin=admin)
