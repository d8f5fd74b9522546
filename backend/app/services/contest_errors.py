"""
backend/app/services/contest_errors.py

Purpose:
    Recoverable rule violations raised by the contest engine and service.
    Each carries a user-facing message and the HTTP status the API maps it to.
"""

from fastapi import status


class ContestError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request violates contest rules."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadySubmitted(ContestError):
    default_message = "Picks already submitted for this day."


class DuplicatePick(ContestError):
    default_message = "Duplicate teams in picks."


class TeamReused(ContestError):
    default_message = "Team already used."


class InvalidTeam(ContestError):
    default_message = "Invalid team."


class WrongPickCount(ContestError):
    default_message = "Wrong number of picks for this day."


class BuybackLimitReached(ContestError):
    default_message = "Maximum buybacks (3) reached."


class BuybackNotAllowedToday(ContestError):
    default_message = "Buybacks are not available on this day."


class PlayerNotFound(ContestError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Player not found."


class DayNotFound(ContestError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Day not found."


class GameNotFound(ContestError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Game not found."


class DuplicateGameId(ContestError):
    default_message = "Game ids must be unique within a day."


class DayAlreadyProcessed(ContestError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Day has already been processed."


class SiteLocked(ContestError):
    status_code = status.HTTP_423_LOCKED
    default_message = "Site is locked for maintenance."


class StorageError(Exception):
    """Persistence failure. Not recoverable by the caller's input."""
