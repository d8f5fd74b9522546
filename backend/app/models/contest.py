"""
backend/app/models/contest.py

Purpose:
    Pydantic records for the survivor pool: contest config, players, games and
    the request/response bodies of the pick and admin endpoints.

    Stored documents use snake_case. Legacy camelCase keys (the flat JSON
    files the pool started from) are still accepted on input.

Dependencies:
    - pydantic
    - app.config_tournament
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.config_tournament import DAY_ORDER, MAX_BUYBACKS

PlayerStatus = Literal["alive", "eliminated"]
DayResult = Literal["pending", "win", "loss"]


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_day(day: str | None) -> str | None:
    if day is not None and day not in DAY_ORDER:
        raise ValueError(f"Unknown day: {day}")
    return day


class ContestConfig(_Record):
    teams: list[str] = []
    buyback_days: list[str] = []
    current_day: Optional[str] = None
    site_locked: bool = False
    lock_message: str = ""
    admin_password_hash: str = ""

    @field_validator("current_day")
    @classmethod
    def _current_day_known(cls, v):
        return _check_day(v)

    @field_validator("buyback_days")
    @classmethod
    def _buyback_days_known(cls, v):
        for day in v:
            _check_day(day)
        return v

    def public_view(self) -> dict:
        """Config as shown to clients, without the admin credential."""
        return self.model_dump(exclude={"admin_password_hash"})


class Player(_Record):
    id: int = Field(gt=0)
    name: str
    status: PlayerStatus = "alive"
    buybacks: int = Field(default=0, ge=0, le=MAX_BUYBACKS)
    needs_buyback: bool = False
    total_spent: int = 0
    picks: dict[str, list[str]] = {}
    results: dict[str, DayResult] = {}

    def used_teams(self) -> set[str]:
        used: set[str] = set()
        for teams in self.picks.values():
            used.update(teams)
        return used


class Game(_Record):
    id: str
    home: str
    away: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    final: bool = False
    winner: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v)

    @model_validator(mode="after")
    def _winner_is_participant(self):
        if self.winner is not None and self.winner not in (self.home, self.away):
            raise ValueError(f"Winner {self.winner!r} did not play in game {self.id}")
        return self


# --- Request bodies ---------------------------------------------------------


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class PickSubmission(_Request):
    player_id: int = Field(gt=0)
    day: str
    picks: list[str] = Field(min_length=1)
    is_buyback: bool = False


class AdminAuthRequest(_Request):
    password: str


class ConfigUpdate(_Request):
    """Admin-editable config fields. The credential is not editable here."""
    teams: Optional[list[str]] = None
    buyback_days: Optional[list[str]] = None
    current_day: Optional[str] = None
    site_locked: Optional[bool] = None
    lock_message: Optional[str] = None


class PlayerCreate(_Request):
    name: str = "New Player"
    status: PlayerStatus = "alive"
    buybacks: int = Field(default=0, ge=0, le=MAX_BUYBACKS)
    needs_buyback: bool = False
    total_spent: Optional[int] = None


class PlayerUpdate(_Request):
    """Whitelisted player fields an admin may overwrite."""
    name: Optional[str] = None
    status: Optional[PlayerStatus] = None
    buybacks: Optional[int] = Field(default=None, ge=0, le=MAX_BUYBACKS)
    needs_buyback: Optional[bool] = None
    total_spent: Optional[int] = None


class GamesReplace(_Request):
    day: str
    games: list[Game]


class GameResultUpdate(_Request):
    day: str
    game_id: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    final: Optional[bool] = None
    winner: Optional[str] = None

    @field_validator("game_id", mode="before")
    @classmethod
    def _game_id_as_str(cls, v):
        return str(v)


class ProcessDayRequest(_Request):
    day: str
    force: bool = False


# --- Responses --------------------------------------------------------------


class DaySummaryEntry(BaseModel):
    id: int
    name: str
    status: PlayerStatus
    result: Optional[DayResult] = None


class DaySummary(BaseModel):
    day: str
    current_day: Optional[str] = None
    processed_at: datetime
    wins: int = 0
    losses: int = 0
    skipped: int = 0
    entries: list[DaySummaryEntry] = []
