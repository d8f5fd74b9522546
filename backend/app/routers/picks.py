"""Pick submission endpoint."""

from fastapi import APIRouter, Depends

from app.models.contest import PickSubmission
from app.services.contest_service import ContestService, get_contest_service

router = APIRouter(prefix="/api", tags=["picks"])


@router.post("/picks")
async def submit_picks(
    body: PickSubmission,
    service: ContestService = Depends(get_contest_service),
):
    """Submit a player's picks for a day, optionally as a buyback."""
    player = await service.submit_pick(body)
    return {"ok": True, "player": player.model_dump()}
