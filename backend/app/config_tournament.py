"""
backend/app/config_tournament.py

Purpose:
    Fixed tournament shape for the survivor pool: day order, pick counts per
    day and buyback economics. These are bracket facts, not contest settings.
"""

DAY_ORDER: tuple[str, ...] = (
    "thursday_r1",
    "friday_r1",
    "saturday_r2",
    "sunday_r2",
    "thursday_s16",
    "friday_s16",
    "saturday_e8",
    "sunday_e8",
    "saturday_ff",
    "monday_champ",
)

ROUND_OF_64_DAYS: frozenset[str] = frozenset(DAY_ORDER[:2])

# A player owing a buyback on this day must cover both halves of the bracket.
BUYBACK_DOUBLE_DAY = DAY_ORDER[1]

PICKS_REGULAR = 1
PICKS_ROUND_OF_64 = 2
PICKS_BUYBACK = 3
PICKS_BUYBACK_DOUBLE = 4

MAX_BUYBACKS = 3
BUYBACK_PRICE = 25
ENTRY_FEE = 25


def is_valid_day(day: str) -> bool:
    return day in DAY_ORDER


def next_day(day: str) -> str | None:
    """Return the day after ``day``, or None when ``day`` is the final."""
    idx = DAY_ORDER.index(day)
    if idx + 1 >= len(DAY_ORDER):
        return None
    return DAY_ORDER[idx + 1]
