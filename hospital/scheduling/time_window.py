"""Time-of-day arithmetic and half-open time windows."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from hospital.scheduling.errors import InvalidWindowError

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidWindowError(f'{minutes} minutes is outside a single day.')
    return time(minutes // 60, minutes % 60)


def quantize(minutes: int, step: int = 15) -> int:
    """Round to the nearest multiple of ``step``, halves rounding up."""
    return (minutes + step // 2) // step * step


@dataclass(frozen=True)
class TimeWindow:
    """Half-open ``[start, end)`` interval within one day."""

    start: time
    end: time

    def contains(self, value: time) -> bool:
        return self.start <= value < self.end

    def overlaps(self, other: 'TimeWindow') -> bool:
        return self.start < other.end and other.start < self.end

    def duration(self) -> timedelta:
        if self.end < self.start:
            raise InvalidWindowError(
                f'Window {self.start.isoformat()}-{self.end.isoformat()} ends before it starts.'
            )
        return datetime.combine(date.min, self.end) - datetime.combine(date.min, self.start)
