"""
backend/app/seed.py

Purpose:
    First-start contest bootstrap and the flat JSON import/export format
    (config.json, players.json, games.json) used by tools/import_contest.py.

Dependencies:
    - app.services.auth_service
    - app.services.contest_store
"""

import json
import logging
from pathlib import Path

from app.config import settings
from app.models.contest import ContestConfig, Game, Player
from app.services.auth_service import hash_password
from app.services.contest_store import ContestStore

logger = logging.getLogger("survivorpool.seed")

CONFIG_FILE = "config.json"
PLAYERS_FILE = "players.json"
GAMES_FILE = "games.json"


def _read_json(path: Path, default):
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def load_legacy_dir(data_dir: Path) -> tuple[ContestConfig, list[Player], dict[str, list[Game]]]:
    """Parse a directory of flat contest JSON files.

    A plaintext ``adminPassword`` in config.json is hashed on the way in.
    """
    raw_config = dict(_read_json(data_dir / CONFIG_FILE, {}))
    password = raw_config.pop("adminPassword", None) or raw_config.pop("admin_password", None)
    config = ContestConfig.model_validate(raw_config)
    if password:
        config.admin_password_hash = hash_password(password)

    players = [Player.model_validate(p) for p in _read_json(data_dir / PLAYERS_FILE, [])]
    games = {
        day: [Game.model_validate(g) for g in day_games]
        for day, day_games in _read_json(data_dir / GAMES_FILE, {}).items()
    }
    return config, players, games


def dump_legacy_dir(
    data_dir: Path,
    config: ContestConfig,
    players: list[Player],
    games: dict[str, list[Game]],
) -> None:
    """Write the contest back out as camelCase JSON files, minus the credential."""
    data_dir.mkdir(parents=True, exist_ok=True)
    files = {
        CONFIG_FILE: config.model_dump(by_alias=True, exclude={"admin_password_hash"}),
        PLAYERS_FILE: [p.model_dump(by_alias=True) for p in players],
        GAMES_FILE: {
            day: [g.model_dump(by_alias=True) for g in day_games]
            for day, day_games in games.items()
        },
    }
    for name, payload in files.items():
        (data_dir / name).write_text(json.dumps(payload, indent=2), encoding="utf-8")


async def import_contest(store: ContestStore, data_dir: Path) -> dict:
    config, players, games = load_legacy_dir(data_dir)
    await store.save_config(config)
    await store.save_players(players)
    await store.save_games(games)
    return {"players": len(players), "game_days": len(games), "teams": len(config.teams)}


async def seed_contest(store: ContestStore) -> None:
    """Create the contest on first start, from SEED_DATA_DIR when configured."""
    if await store.load_config() is not None:
        logger.debug("Contest config exists, skipping seed")
        return

    if settings.SEED_DATA_DIR:
        data_dir = Path(settings.SEED_DATA_DIR)
        result = await import_contest(store, data_dir)
        logger.info("Contest seeded from %s: %s", data_dir, result)
        return

    config = ContestConfig()
    if settings.SEED_ADMIN_PASSWORD:
        config.admin_password_hash = hash_password(settings.SEED_ADMIN_PASSWORD)
    else:
        logger.warning("SEED_ADMIN_PASSWORD not set, admin endpoints stay closed")
    await store.save_config(config)
    logger.info("Empty contest config created")
