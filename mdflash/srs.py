"""SRS calculator: maps a review response onto a new interval, ease and due date.

Ease uses the x100 convention (250 means 2.50). Intervals are whole days.
"""

import math
from datetime import datetime, timedelta, timezone

from mdflash.models import ReviewResponse, ScheduleInfo, SrsSettings

MIN_EASE = 130
HARD_EASE_PENALTY = 20
EASY_EASE_BONUS = 15


class InvalidResponseError(ValueError):
    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime:
    """Default to the current time; naive datetimes are taken as UTC."""
    if value is None:
        return utc_now()
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def coerce_response(response) -> ReviewResponse:
    if isinstance(response, ReviewResponse):
        return response
    try:
        return ReviewResponse(response)
    except ValueError:
        raise InvalidResponseError(f"Invalid response: {response!r}") from None


def calculate_schedule(response, current_interval: int, current_ease: int,
                       settings: SrsSettings, now: datetime | None = None) -> ScheduleInfo:
    """Compute the next schedule for a card answered with `response`.

    Hard shrinks ease by 20 (floor 130) and scales the interval by
    hard_factor; Good multiplies the interval by ease; Easy additionally
    applies easy_bonus and raises ease by 15. The interval is capped at
    settings.maximum_interval and the due date is `now` plus that many
    calendar days.
    """
    response = coerce_response(response)
    new_ease = current_ease

    if response is ReviewResponse.HARD:
        new_interval = max(1, round_half_up(current_interval * settings.hard_factor))
        new_ease = max(MIN_EASE, current_ease - HARD_EASE_PENALTY)
    elif response is ReviewResponse.GOOD:
        new_interval = max(1, round_half_up(current_interval * current_ease / 100))
    else:
        new_interval = max(1, round_half_up(
            current_interval * current_ease / 100 * settings.easy_bonus))
        new_ease = current_ease + EASY_EASE_BONUS

    new_interval = min(new_interval, settings.maximum_interval)

    now = ensure_utc(now)
    return ScheduleInfo(interval=new_interval, ease=new_ease,
                        due_date=now + timedelta(days=new_interval), is_due=False)


def calculate_initial_schedule(response, settings: SrsSettings,
                               now: datetime | None = None) -> ScheduleInfo:
    """Schedule for the first answer to a never-reviewed card."""
    return calculate_schedule(response, 1, settings.base_ease, settings, now)
