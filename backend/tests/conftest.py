"""
backend/tests/conftest.py

Purpose:
    Shared pytest bootstrap for import paths used by backend and root-level
    tool module tests, plus an in-memory contest store.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

_THIS_FILE = Path(__file__).resolve()
_BACKEND_DIR = _THIS_FILE.parents[1]
_REPO_ROOT = _THIS_FILE.parents[2]

for candidate in (str(_BACKEND_DIR), str(_REPO_ROOT)):
    if candidate not in sys.path:
        sys.path.insert(0, candidate)

from app.models.contest import ContestConfig, Game, Player  # noqa: E402


class MemoryContestStore:
    """ContestStore keeping deep copies, so tests see only what was saved.

    Every call yields to the event loop like a real driver round trip.
    """

    def __init__(
        self,
        config: ContestConfig | None = None,
        players: list[Player] | None = None,
        games: dict[str, list[Game]] | None = None,
    ):
        self.config = config
        self.players = list(players or [])
        self.games = dict(games or {})
        self.saves: list[str] = []

    async def load_config(self):
        await asyncio.sleep(0)
        return self.config.model_copy(deep=True) if self.config else None

    async def save_config(self, config):
        await asyncio.sleep(0)
        self.saves.append("config")
        self.config = config.model_copy(deep=True)

    async def load_players(self):
        await asyncio.sleep(0)
        return [p.model_copy(deep=True) for p in self.players]

    async def save_players(self, players):
        await asyncio.sleep(0)
        self.saves.append("players")
        self.players = [p.model_copy(deep=True) for p in players]

    async def load_games(self):
        await asyncio.sleep(0)
        return {day: [g.model_copy() for g in games] for day, games in self.games.items()}

    async def save_games(self, games):
        await asyncio.sleep(0)
        self.saves.append("games")
        self.games = {day: [g.model_copy() for g in day_games] for day, day_games in games.items()}


@pytest.fixture
def memory_store() -> MemoryContestStore:
    return MemoryContestStore(
        config=ContestConfig(
            teams=["Duke", "UNC", "Kansas", "Gonzaga", "Houston", "Purdue", "Auburn", "Baylor"],
            buyback_days=["thursday_r1", "friday_r1"],
            current_day="thursday_r1",
        ),
        players=[
            Player(id=1, name="Avery", total_spent=25),
            Player(id=2, name="Blake", total_spent=25),
        ],
    )
