"""Print a generated doctor day, its activities and its open slots.

Usage:
    python -m hospital.preview_schedule [--seed N] [--date YYYY-MM-DD] [--booked HH:MM ...]
"""
import argparse
import random
from datetime import date, time

from hospital.scheduling.activity_planner import describe_activities, format_clock_label, plan_daily_activities
from hospital.scheduling.schedule_generator import generate_schedule_times
from hospital.scheduling.slot_calculator import calculate_available_slots


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--date", type=date.fromisoformat, default=None)
    parser.add_argument("--booked", type=time.fromisoformat, nargs="*", default=[])
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    rng = random.Random(args.seed)
    day = args.date or date.today()

    times = generate_schedule_times(rng)
    print(f"Schedule for {day.isoformat()}")
    print(f"  Working hours: {format_clock_label(times.start_time)} - {format_clock_label(times.end_time)}")
    print(f"  Lunch break:   {format_clock_label(times.lunch_start_time)} - {format_clock_label(times.lunch_end_time)}")

    print("Activities")
    for line in describe_activities(plan_daily_activities(times, rng)):
        print(f"  {line}")

    slots = calculate_available_slots(times, args.booked)
    print("Open slots")
    if not slots:
        print("  none")
    for slot_time in slots:
        print(f"  {format_clock_label(slot_time)}")


if __name__ == "__main__":
    main()
