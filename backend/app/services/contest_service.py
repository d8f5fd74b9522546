"""
backend/app/services/contest_service.py

Purpose:
    Read-modify-write orchestration around the contest engine. Every mutating
    operation loads the records it needs, applies engine rules and writes the
    result back while holding one asyncio.Lock, so concurrent pick
    submissions and day processing cannot overwrite each other.

Dependencies:
    - app.services.contest_engine
    - app.services.contest_store
"""

import asyncio
import logging

from app.config_tournament import ENTRY_FEE, is_valid_day
from app.models.contest import (
    ConfigUpdate,
    ContestConfig,
    DaySummary,
    Game,
    GameResultUpdate,
    PickSubmission,
    Player,
    PlayerCreate,
    PlayerUpdate,
)
from app.services import contest_engine
from app.services.contest_errors import (
    ContestError,
    DayNotFound,
    DuplicateGameId,
    GameNotFound,
    PlayerNotFound,
    SiteLocked,
)
from app.services.contest_store import ContestStore, MongoContestStore

logger = logging.getLogger("survivorpool.contest_service")


class ContestService:
    """Serialized access to one contest's config, players and games."""

    _instance: "ContestService | None" = None

    def __init__(self, store: ContestStore):
        self.store = store
        self._lock = asyncio.Lock()

    @classmethod
    def get(cls) -> "ContestService":
        if cls._instance is None:
            cls._instance = cls(MongoContestStore())
        return cls._instance

    async def _config(self) -> ContestConfig:
        return await self.store.load_config() or ContestConfig()

    async def load_config(self) -> ContestConfig:
        return await self._config()

    # --- Public ---------------------------------------------------------

    async def get_state(self, admin: bool = False) -> dict:
        """Full public state, or only the lock notice while the site is locked."""
        async with self._lock:
            config = await self._config()
            if config.site_locked and not admin:
                return {"site_locked": True, "lock_message": config.lock_message}
            players = await self.store.load_players()
            games = await self.store.load_games()
        return {
            "site_locked": False,
            "config": config.public_view(),
            "players": [p.model_dump() for p in players],
            "games": {
                day: [g.model_dump() for g in day_games]
                for day, day_games in games.items()
            },
        }

    async def submit_pick(self, submission: PickSubmission) -> Player:
        async with self._lock:
            config = await self._config()
            if config.site_locked:
                raise SiteLocked()
            players = await self.store.load_players()
            try:
                updated = contest_engine.submit_pick(
                    players,
                    config,
                    submission.player_id,
                    submission.day,
                    submission.picks,
                    submission.is_buyback,
                )
            except ContestError as exc:
                logger.info(
                    "Picks rejected: player=%d day=%s reason=%s",
                    submission.player_id, submission.day, exc,
                )
                raise
            await self.store.save_players(_replace_player(players, updated))
        return updated

    # --- Admin ----------------------------------------------------------

    async def update_config(self, update: ConfigUpdate) -> ContestConfig:
        async with self._lock:
            config = await self._config()
            changes = update.model_dump(exclude_unset=True, exclude_none=True)
            for day in [changes.get("current_day"), *changes.get("buyback_days", [])]:
                if day is not None and not is_valid_day(day):
                    raise DayNotFound(f"Unknown day: {day}")
            updated = ContestConfig.model_validate({**config.model_dump(), **changes})
            await self.store.save_config(updated)
        logger.info("Config updated: fields=%s", ",".join(sorted(changes)))
        return updated

    async def create_player(self, body: PlayerCreate) -> Player:
        async with self._lock:
            players = await self.store.load_players()
            next_id = max((p.id for p in players), default=0) + 1
            player = Player(
                id=next_id,
                name=body.name,
                status=body.status,
                buybacks=body.buybacks,
                needs_buyback=body.needs_buyback,
                total_spent=ENTRY_FEE if body.total_spent is None else body.total_spent,
            )
            await self.store.save_players([*players, player])
        logger.info("Player created: id=%d name=%s", player.id, player.name)
        return player

    async def update_player(self, player_id: int, update: PlayerUpdate) -> Player:
        async with self._lock:
            players = await self.store.load_players()
            player = contest_engine.find_player(players, player_id)
            updated = contest_engine.apply_player_update(player, update)
            await self.store.save_players(_replace_player(players, updated))
        logger.info("Player updated: id=%d", player_id)
        return updated

    async def delete_player(self, player_id: int) -> None:
        async with self._lock:
            players = await self.store.load_players()
            remaining = [p for p in players if p.id != player_id]
            if len(remaining) == len(players):
                raise PlayerNotFound()
            await self.store.save_players(remaining)
        logger.info("Player deleted: id=%d", player_id)

    async def replace_games(self, day: str, games: list[Game]) -> list[Game]:
        if not is_valid_day(day):
            raise DayNotFound(f"Unknown day: {day}")
        seen: set[str] = set()
        for game in games:
            if game.id in seen:
                raise DuplicateGameId(f"Duplicate game id on {day}: {game.id}")
            seen.add(game.id)
        async with self._lock:
            all_games = await self.store.load_games()
            all_games[day] = list(games)
            await self.store.save_games(all_games)
        logger.info("Games replaced: day=%s count=%d", day, len(games))
        return games

    async def update_game_result(self, update: GameResultUpdate) -> Game:
        async with self._lock:
            all_games = await self.store.load_games()
            day_games = all_games.get(update.day)
            if day_games is None:
                raise DayNotFound()
            for idx, game in enumerate(day_games):
                if game.id == update.game_id:
                    break
            else:
                raise GameNotFound()

            changes = update.model_dump(
                include={"home_score", "away_score", "final", "winner"},
                exclude_unset=True,
            )
            updated = Game.model_validate({**game.model_dump(), **changes})
            day_games[idx] = updated
            await self.store.save_games(all_games)
        logger.info(
            "Game result updated: day=%s game=%s final=%s winner=%s",
            update.day, updated.id, updated.final, updated.winner,
        )
        return updated

    async def process_day(self, day: str, force: bool = False) -> DaySummary:
        async with self._lock:
            config = await self._config()
            players = await self.store.load_players()
            all_games = await self.store.load_games()
            summary, new_config, new_players = contest_engine.process_day(
                config, players, all_games.get(day, []), day, force=force,
            )
            await self.store.save_players(new_players)
            await self.store.save_config(new_config)
        return summary


def _replace_player(players: list[Player], updated: Player) -> list[Player]:
    return [updated if p.id == updated.id else p for p in players]


def get_contest_service() -> ContestService:
    """FastAPI dependency for the process-wide contest service."""
    return ContestService.get()
