"""
backend/app/services/contest_store.py

Purpose:
    Persistence collaborator for the contest records. The engine never sees
    Mongo documents; this module converts between documents and models and
    turns driver or schema failures into StorageError.

Dependencies:
    - app.database
    - pymongo.errors
    - pydantic
"""

import logging
from typing import Protocol

from pydantic import ValidationError
from pymongo import ReplaceOne
from pymongo.errors import PyMongoError

import app.database as _db
from app.models.contest import ContestConfig, Game, Player
from app.services.contest_errors import StorageError

logger = logging.getLogger("survivorpool.contest_store")

CONFIG_DOC_ID = "contest"


class ContestStore(Protocol):
    async def load_config(self) -> ContestConfig | None: ...
    async def save_config(self, config: ContestConfig) -> None: ...
    async def load_players(self) -> list[Player]: ...
    async def save_players(self, players: list[Player]) -> None: ...
    async def load_games(self) -> dict[str, list[Game]]: ...
    async def save_games(self, games: dict[str, list[Game]]) -> None: ...


class MongoContestStore:
    """ContestStore backed by the ``app.database`` Motor handle."""

    @property
    def _db(self):
        if _db.db is None:
            raise StorageError("Database is not connected.")
        return _db.db

    async def load_config(self) -> ContestConfig | None:
        try:
            doc = await self._db.contest_config.find_one({"_id": CONFIG_DOC_ID})
        except PyMongoError as exc:
            logger.error("Loading contest config failed: %s", exc)
            raise StorageError("Could not load contest config.") from exc
        if doc is None:
            return None
        doc.pop("_id", None)
        return _parse(ContestConfig, doc, "contest config")

    async def save_config(self, config: ContestConfig) -> None:
        doc = config.model_dump()
        try:
            await self._db.contest_config.replace_one(
                {"_id": CONFIG_DOC_ID}, {"_id": CONFIG_DOC_ID, **doc}, upsert=True,
            )
        except PyMongoError as exc:
            logger.error("Saving contest config failed: %s", exc)
            raise StorageError("Could not save contest config.") from exc

    async def load_players(self) -> list[Player]:
        try:
            docs = await self._db.players.find({}, {"_id": 0}).sort("id", 1).to_list(length=None)
        except PyMongoError as exc:
            logger.error("Loading players failed: %s", exc)
            raise StorageError("Could not load players.") from exc
        return [_parse(Player, doc, "player") for doc in docs]

    async def save_players(self, players: list[Player]) -> None:
        """Replace the stored player set with ``players``."""
        ops = [
            ReplaceOne({"id": p.id}, p.model_dump(), upsert=True)
            for p in players
        ]
        keep_ids = [p.id for p in players]
        try:
            if ops:
                await self._db.players.bulk_write(ops, ordered=False)
            await self._db.players.delete_many({"id": {"$nin": keep_ids}})
        except PyMongoError as exc:
            logger.error("Saving players failed: %s", exc)
            raise StorageError("Could not save players.") from exc

    async def load_games(self) -> dict[str, list[Game]]:
        try:
            docs = await self._db.games.find({}).to_list(length=None)
        except PyMongoError as exc:
            logger.error("Loading games failed: %s", exc)
            raise StorageError("Could not load games.") from exc
        return {
            doc["_id"]: [_parse(Game, g, "game") for g in doc.get("games", [])]
            for doc in docs
        }

    async def save_games(self, games: dict[str, list[Game]]) -> None:
        ops = [
            ReplaceOne(
                {"_id": day},
                {"_id": day, "games": [g.model_dump() for g in day_games]},
                upsert=True,
            )
            for day, day_games in games.items()
        ]
        try:
            if ops:
                await self._db.games.bulk_write(ops, ordered=False)
            await self._db.games.delete_many({"_id": {"$nin": list(games)}})
        except PyMongoError as exc:
            logger.error("Saving games failed: %s", exc)
            raise StorageError("Could not save games.") from exc


def _parse(model, doc: dict, label: str):
    try:
        return model.model_validate(doc)
    except ValidationError as exc:
        logger.error("Malformed %s document: %s", label, exc)
        raise StorageError(f"Malformed {label} document.") from exc
