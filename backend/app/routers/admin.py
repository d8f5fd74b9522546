"""Admin endpoints: credentials, config, players, games and day processing."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.contest import (
    AdminAuthRequest,
    ConfigUpdate,
    GameResultUpdate,
    GamesReplace,
    PlayerCreate,
    PlayerUpdate,
    ProcessDayRequest,
)
from app.services.auth_service import authenticate_admin, require_admin
from app.services.contest_service import ContestService, get_contest_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/auth")
async def admin_auth(
    body: AdminAuthRequest,
    service: ContestService = Depends(get_contest_service),
):
    """Check an admin password without changing anything."""
    if not await authenticate_admin(service, body.password):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid password.")
    return {"ok": True}


@router.post("/config")
async def update_config(
    body: ConfigUpdate,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    config = await service.update_config(body)
    return {"ok": True, "config": config.public_view()}


@router.post("/player")
async def create_player(
    body: PlayerCreate,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    player = await service.create_player(body)
    return {"ok": True, "player": player.model_dump()}


@router.patch("/player/{player_id}")
async def update_player(
    player_id: int,
    body: PlayerUpdate,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    player = await service.update_player(player_id, body)
    return {"ok": True, "player": player.model_dump()}


@router.delete("/player/{player_id}")
async def delete_player(
    player_id: int,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    await service.delete_player(player_id)
    return {"ok": True}


@router.post("/games")
async def replace_games(
    body: GamesReplace,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    """Replace the full game list of one day."""
    games = await service.replace_games(body.day, body.games)
    return {"ok": True, "day": body.day, "count": len(games)}


@router.post("/game-result")
async def update_game_result(
    body: GameResultUpdate,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    """Record scores, finality or the winner of one game."""
    game = await service.update_game_result(body)
    return {"ok": True, "game": game.model_dump()}


@router.post("/process-day")
async def process_day(
    body: ProcessDayRequest,
    admin=Depends(require_admin),
    service: ContestService = Depends(get_contest_service),
):
    """Grade a day's picks and advance the contest to the next day."""
    summary = await service.process_day(body.day, force=body.force)
    return {
        "ok": True,
        "current_day": summary.current_day,
        "summary": summary.model_dump(mode="json"),
    }
