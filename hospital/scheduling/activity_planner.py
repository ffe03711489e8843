"""Filler activities shown on a doctor's daily schedule page.

Display only: nothing here is used for conflict checks.
"""

import random
from dataclasses import dataclass
from datetime import time

from hospital.scheduling.time_window import from_minutes, to_minutes

MORNING_END = time(12, 0)
MIDDAY_END = time(15, 0)
WRAP_UP_AFTER = time(17, 0)
WRAP_UP_LEAD_MINUTES = 30
FALLBACK_STEP_MINUTES = 30
MIN_ACTIVITY_MINUTES = 45
MAX_ACTIVITY_MINUTES = 90

MORNING_ACTIVITIES = (
    'Morning Rounds',
    'Patient Consultations',
    'Review Lab Results',
    'Ward Visits',
)
MIDDAY_ACTIVITIES = (
    'Patient Consultations',
    'Case Conference',
    'Procedure Preparation',
    'Follow-up Calls',
)
AFTERNOON_ACTIVITIES = (
    'Admin Work',
    'Patient Consultations',
    'Chart Review',
    'Teaching Residents',
)
WRAP_UP_ACTIVITY = 'Wrap-up & Handover Notes'


def format_clock_label(value: time) -> str:
    return value.strftime('%I:%M %p')


@dataclass(frozen=True)
class PlannedActivity:
    at: time
    label: str

    def __str__(self) -> str:
        return f'({format_clock_label(self.at)}) - {self.label}'


def _activities_for(cursor: int, lunch_start: int) -> tuple[str, ...] | None:
    if cursor < to_minutes(MORNING_END) and cursor < lunch_start:
        return MORNING_ACTIVITIES
    if to_minutes(MORNING_END) <= cursor < to_minutes(MIDDAY_END):
        return MIDDAY_ACTIVITIES
    if cursor >= to_minutes(MIDDAY_END):
        return AFTERNOON_ACTIVITIES
    # Morning time already past lunch: no band applies.
    return None


def plan_daily_activities(schedule, rng: random.Random) -> list[PlannedActivity]:
    """Tile ``[start_time, end_time)`` with activities, skipping lunch.

    ``schedule`` is anything with ``start_time``, ``end_time``,
    ``lunch_start_time`` and ``lunch_end_time`` attributes. Entries come back
    in non-decreasing time order.
    """
    start = to_minutes(schedule.start_time)
    end = to_minutes(schedule.end_time)
    lunch_start = to_minutes(schedule.lunch_start_time)
    lunch_end = to_minutes(schedule.lunch_end_time)

    activities: list[PlannedActivity] = []
    cursor = start

    while cursor < end:
        if lunch_start <= cursor < lunch_end:
            cursor = lunch_end
            if cursor >= end:
                break
            continue

        choices = _activities_for(cursor, lunch_start)
        if choices is None:
            cursor += FALLBACK_STEP_MINUTES
            continue

        activities.append(PlannedActivity(at=from_minutes(cursor), label=rng.choice(choices)))
        cursor += rng.randint(MIN_ACTIVITY_MINUTES, MAX_ACTIVITY_MINUTES)

    wrap_up_at = end - WRAP_UP_LEAD_MINUTES
    if (
        activities
        and end > to_minutes(WRAP_UP_AFTER)
        and wrap_up_at > to_minutes(activities[-1].at)
    ):
        activities.append(PlannedActivity(at=from_minutes(wrap_up_at), label=WRAP_UP_ACTIVITY))

    return activities


def describe_activities(activities: list[PlannedActivity]) -> list[str]:
    return [str(activity) for activity in activities]
