from collections.abc import Iterable
from datetime import time

from hospital.scheduling.time_window import from_minutes, to_minutes

SLOT_DURATION_MINUTES = 30


def iterate_slot_starts(start_time: time, end_time: time) -> list[time]:
    slots: list[time] = []
    current = to_minutes(start_time)
    if start_time.second or start_time.microsecond:
        current += SLOT_DURATION_MINUTES
    last = to_minutes(end_time)

    while current < last:
        slots.append(from_minutes(current))
        current += SLOT_DURATION_MINUTES

    return slots


def calculate_available_slots(schedule, booked_times: Iterable[time]) -> list[time]:
    """Return the open 30-minute starts of ``schedule`` in ascending order.

    A slot is taken only by a booking at exactly the same time. The lunch
    window stays bookable.
    """
    booked = set(booked_times)
    return [
        slot_time
        for slot_time in iterate_slot_starts(schedule.start_time, schedule.end_time)
        if slot_time not in booked
    ]
