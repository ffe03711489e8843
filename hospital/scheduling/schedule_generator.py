"""Bounded-random generation of a doctor's working day.

A day is generated once per ``(doctor_id, date)`` and stored; later reads
return the stored row untouched. All draws come from the ``random.Random``
instance passed in, so a seeded generator replays the same day.
"""

import random
from dataclasses import dataclass
from datetime import date, time

from hospital.core import config
from hospital.models.schedule import DoctorSchedule
from hospital.scheduling.time_window import from_minutes, quantize, to_minutes

EARLIEST_START = time(8, 0)
LATEST_START = time(10, 0)
LATEST_END = time(18, 0)
QUARTER_HOURS = (0, 15, 30, 45)
LUNCH_HOURS = (12, 13)

MIN_WORK_MINUTES = 4 * 60
MAX_WORK_MINUTES = 7 * 60
FALLBACK_MIN_WORK_MINUTES = 2 * 60
FALLBACK_MAX_WORK_MINUTES = 5 * 60
DEGENERATE_DAY_MINUTES = 30

LUNCH_NOT_BEFORE_START_MINUTES = 60
LUNCH_LATEST_BEFORE_END_MINUTES = 90
LUNCH_FALLBACK_MIN_BEFORE_END_MINUTES = 2 * 60
LUNCH_FALLBACK_MAX_BEFORE_END_MINUTES = 3 * 60
MIN_LUNCH_MINUTES = 30
MAX_LUNCH_MINUTES = 90


@dataclass(frozen=True)
class DailyScheduleTimes:
    """The four clock times that make up a generated day."""

    start_time: time
    end_time: time
    lunch_start_time: time
    lunch_end_time: time


def _draw_quarter_hour(rng: random.Random, low: int, high: int) -> int:
    return rng.randrange(low, high + 1, 15)


def _draw_start(rng: random.Random) -> int:
    return _draw_quarter_hour(rng, to_minutes(EARLIEST_START), to_minutes(LATEST_START))


def _draw_end(rng: random.Random, start: int) -> int:
    latest_end = to_minutes(LATEST_END)
    end = min(start + _draw_quarter_hour(rng, MIN_WORK_MINUTES, MAX_WORK_MINUTES), latest_end)
    if end <= start + DEGENERATE_DAY_MINUTES:
        end = min(
            start + _draw_quarter_hour(rng, FALLBACK_MIN_WORK_MINUTES, FALLBACK_MAX_WORK_MINUTES),
            latest_end,
        )
    return end


def _draw_lunch_start(rng: random.Random, start: int, end: int) -> int:
    lunch_start = rng.choice(LUNCH_HOURS) * 60 + rng.choice(QUARTER_HOURS)
    lunch_start = max(lunch_start, start + LUNCH_NOT_BEFORE_START_MINUTES)
    if lunch_start > end - LUNCH_LATEST_BEFORE_END_MINUTES:
        lunch_start = quantize(
            end - rng.randint(LUNCH_FALLBACK_MIN_BEFORE_END_MINUTES, LUNCH_FALLBACK_MAX_BEFORE_END_MINUTES)
        )
    # Short days can push the recomputed lunch outside the working window.
    return min(max(lunch_start, start), end)


def generate_schedule_times(rng: random.Random) -> DailyScheduleTimes:
    """Draw one working day.

    The result always satisfies ``start < end`` and
    ``start <= lunch_start <= lunch_end <= end``, with every time inside a
    single day.
    """
    start = _draw_start(rng)
    end = _draw_end(rng, start)
    lunch_start = _draw_lunch_start(rng, start, end)
    lunch_end = min(lunch_start + rng.randint(MIN_LUNCH_MINUTES, MAX_LUNCH_MINUTES), end)

    return DailyScheduleTimes(
        start_time=from_minutes(start),
        end_time=from_minutes(end),
        lunch_start_time=from_minutes(lunch_start),
        lunch_end_time=from_minutes(lunch_end),
    )


def build_doctor_schedule(
    doctor_id: int,
    day: date,
    rng: random.Random,
    location: str | None = None,
) -> DoctorSchedule:
    """Generate an unsaved schedule row for ``doctor_id`` on ``day``."""
    times = generate_schedule_times(rng)
    return DoctorSchedule(
        doctor_id=doctor_id,
        date=day,
        start_time=times.start_time,
        end_time=times.end_time,
        lunch_start_time=times.lunch_start_time,
        lunch_end_time=times.lunch_end_time,
        location=location or config.DEFAULT_SCHEDULE_LOCATION,
        is_available=True,
        min_work_time=EARLIEST_START,
        max_work_time=LATEST_END,
    )
