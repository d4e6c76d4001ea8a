from datetime import time

DEFAULT_DURATION = 90

BREAKFAST_START = 6
LUNCH_START = 11
DINNER_START = 15

BREAKFAST_DEFAULT = 45
LUNCH_DEFAULT = 60
DINNER_DEFAULT = 90


def _hour_of(value) -> int:
    if isinstance(value, time):
        return value.hour
    return int(str(value).split(":")[0])


def resolve_duration(start, occupation=None) -> int:
    """
    Return how many minutes a reservation starting at ``start`` holds its table.

    ``start`` is a ``datetime.time`` or an "HH:MM" string. ``occupation`` is the
    restaurant's TableOccupation (or anything exposing ``breakfast_minutes``,
    ``lunch_minutes`` and ``dinner_minutes``). Without one every reservation
    lasts DEFAULT_DURATION. Boundary hours belong to the later period, so
    11:00 is lunch and 15:00 is dinner.
    """
    if occupation is None:
        return DEFAULT_DURATION

    hour = _hour_of(start)
    if BREAKFAST_START <= hour < LUNCH_START:
        return occupation.breakfast_minutes or BREAKFAST_DEFAULT
    if LUNCH_START <= hour < DINNER_START:
        return occupation.lunch_minutes or LUNCH_DEFAULT
    return occupation.dinner_minutes or DINNER_DEFAULT


def duration_for_restaurant(restaurant, start) -> int:
    occupation = getattr(restaurant, "table_occupation", None)
    return resolve_duration(start, occupation)
