"""
backend/app/services/contest_engine.py

Purpose:
    Pure survivor-pool rules: pick validation, buyback transitions and day
    processing. Functions take records in and hand new records back; nothing
    here touches storage, and inputs are never mutated.

Dependencies:
    - app.config_tournament
    - app.models.contest
    - app.services.contest_errors
"""

import logging

from app.config_tournament import (
    BUYBACK_DOUBLE_DAY,
    BUYBACK_PRICE,
    DAY_ORDER,
    MAX_BUYBACKS,
    PICKS_BUYBACK,
    PICKS_BUYBACK_DOUBLE,
    PICKS_REGULAR,
    PICKS_ROUND_OF_64,
    ROUND_OF_64_DAYS,
    next_day,
)
from app.models.contest import (
    ContestConfig,
    DaySummary,
    DaySummaryEntry,
    Game,
    Player,
    PlayerUpdate,
)
from app.services.contest_errors import (
    AlreadySubmitted,
    BuybackLimitReached,
    BuybackNotAllowedToday,
    DayAlreadyProcessed,
    DayNotFound,
    DuplicatePick,
    InvalidTeam,
    PlayerNotFound,
    TeamReused,
    WrongPickCount,
)
from app.utils import utcnow

logger = logging.getLogger("survivorpool.contest_engine")


def required_pick_count(player: Player, day: str) -> int:
    """Number of teams ``player`` must pick on ``day``."""
    if not player.needs_buyback:
        return PICKS_ROUND_OF_64 if day in ROUND_OF_64_DAYS else PICKS_REGULAR
    return PICKS_BUYBACK_DOUBLE if day == BUYBACK_DOUBLE_DAY else PICKS_BUYBACK


def find_player(players: list[Player], player_id: int) -> Player:
    for player in players:
        if player.id == player_id:
            return player
    raise PlayerNotFound()


def validate_picks(
    player: Player,
    config: ContestConfig,
    day: str,
    picks: list[str],
    is_buyback: bool,
) -> None:
    """Raise the first rule a submission breaks. Order is user-visible."""
    if day in player.picks:
        raise AlreadySubmitted()

    if len(set(picks)) != len(picks):
        raise DuplicatePick()

    used = player.used_teams()
    reused = [team for team in picks if team in used]
    if reused:
        raise TeamReused(f"Team already used: {reused[0]}")

    roster = set(config.teams)
    invalid = [team for team in picks if team not in roster]
    if invalid:
        raise InvalidTeam(f"Invalid team: {invalid[0]}")

    required = required_pick_count(player, day)
    if len(picks) != required:
        raise WrongPickCount(f"Exactly {required} pick(s) required for this day.")

    if is_buyback:
        if player.buybacks >= MAX_BUYBACKS:
            raise BuybackLimitReached(f"Maximum buybacks ({MAX_BUYBACKS}) reached.")
        if day not in config.buyback_days:
            raise BuybackNotAllowedToday()


def submit_pick(
    players: list[Player],
    config: ContestConfig,
    player_id: int,
    day: str,
    picks: list[str],
    is_buyback: bool = False,
) -> Player:
    """Validate a pick submission and return the player's updated record."""
    if day not in DAY_ORDER:
        raise DayNotFound(f"Unknown day: {day}")
    player = find_player(players, player_id)
    validate_picks(player, config, day, picks, is_buyback)

    updated = player.model_copy(deep=True)
    if is_buyback:
        updated.status = "alive"
        updated.buybacks += 1
        updated.total_spent += BUYBACK_PRICE
        updated.needs_buyback = False

    updated.picks[day] = list(picks)
    updated.results[day] = "pending"

    logger.info(
        "Picks accepted: player=%d day=%s picks=%s buyback=%s",
        updated.id, day, ",".join(picks), is_buyback,
    )
    return updated


def winning_teams(games: list[Game]) -> set[str]:
    """Winners of every final game that has one recorded."""
    return {game.winner for game in games if game.final and game.winner}


def is_day_processed(config: ContestConfig, players: list[Player], day: str) -> bool:
    """True once the day was graded or the contest has moved past it."""
    if config.current_day is not None and DAY_ORDER.index(day) < DAY_ORDER.index(config.current_day):
        return True
    return any(p.results.get(day) in ("win", "loss") for p in players)


def process_day(
    config: ContestConfig,
    players: list[Player],
    games: list[Game],
    day: str,
    force: bool = False,
) -> tuple[DaySummary, ContestConfig, list[Player]]:
    """Grade ``day``'s picks, eliminate losers and advance the current day.

    Raises DayAlreadyProcessed when results for the day were already graded
    or the contest has moved past it, unless ``force`` is set.
    """
    if day not in DAY_ORDER:
        raise DayNotFound(f"Unknown day: {day}")
    if not force and is_day_processed(config, players, day):
        raise DayAlreadyProcessed(f"Results for {day} have already been processed.")

    winners = winning_teams(games)
    buyback_day = day in config.buyback_days

    updated_players: list[Player] = []
    wins = losses = skipped = 0
    for player in players:
        player = player.model_copy(deep=True)
        updated_players.append(player)

        day_picks = player.picks.get(day)
        if player.status != "alive" or not day_picks:
            skipped += 1
            continue

        if all(team in winners for team in day_picks):
            player.results[day] = "win"
            wins += 1
            continue

        player.results[day] = "loss"
        player.status = "eliminated"
        player.needs_buyback = buyback_day and player.buybacks < MAX_BUYBACKS
        losses += 1

    updated_config = config.model_copy(deep=True)
    following = next_day(day)
    if following is not None:
        updated_config.current_day = following

    summary = DaySummary(
        day=day,
        current_day=updated_config.current_day,
        processed_at=utcnow(),
        wins=wins,
        losses=losses,
        skipped=skipped,
        entries=[
            DaySummaryEntry(
                id=p.id,
                name=p.name,
                status=p.status,
                result=p.results.get(day),
            )
            for p in updated_players
        ],
    )
    logger.info(
        "Day processed: day=%s winners=%d wins=%d losses=%d skipped=%d next=%s",
        day, len(winners), wins, losses, skipped, updated_config.current_day,
    )
    return summary, updated_config, updated_players


def apply_player_update(player: Player, update: PlayerUpdate) -> Player:
    """Apply the admin-editable subset of fields, re-validating the record."""
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    return Player.model_validate({**player.model_dump(), **changes})
