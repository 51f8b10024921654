"""
Mars Photo API: Sol / Earth Date Conversion
=============================================

What:  Converts between a rover's mission sol and the Earth calendar date.
How:   Fixed ratio of one Mars solar day (88775.244 s) to one Earth day
       (86400 s), anchored at 00:00 UTC on the rover's landing date.
Who:   Adapters (earth_date on every photo), RoverService (max_date,
       earth_date query parameter), manifest sol summaries.

Round trip:
    earth_date_to_sol(landing, sol_to_earth_date(landing, s)) is within
    ±1 of s. Truncating to a calendar date drops up to one Earth day, and
    rounding the inverse back onto the sol grid absorbs it.
"""

import math
from datetime import date, datetime, time, timedelta, timezone

SECONDS_PER_SOL = 88775.244
SECONDS_PER_DAY = 86400


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def sol_to_earth_date(landing_date: date, sol: int) -> date:
    """
    Earth calendar date (UTC) on which the given sol falls.

    Args:
        landing_date: The rover's landing date (sol 0).
        sol:          Non-negative mission sol.
    """
    landing = datetime.combine(landing_date, time.min, tzinfo=timezone.utc)
    elapsed = timedelta(seconds=sol * SECONDS_PER_SOL)
    return (landing + elapsed).date()


def earth_date_to_sol(landing_date: date, earth_date: date) -> int:
    """
    Nearest sol for an Earth calendar date.

    The result is negative when `earth_date` precedes the landing date;
    callers must treat that as invalid input.
    """
    elapsed_days = (earth_date - landing_date).days
    return round_half_up(elapsed_days * SECONDS_PER_DAY / SECONDS_PER_SOL)
