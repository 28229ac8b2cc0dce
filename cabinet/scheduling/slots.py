from datetime import date, datetime, timedelta

DEFAULT_GRANULARITY_MINUTES = 30


def generate_bookable_times(slot, granularity=DEFAULT_GRANULARITY_MINUTES):
    """Yield start times from slot.start_time, every ``granularity`` minutes,
    stopping strictly before slot.end_time.

    A fresh generator is built on every call, so the sequence can be
    recomputed at will.
    """
    if granularity <= 0:
        raise ValueError("granularity must be a positive number of minutes")

    step = timedelta(minutes=granularity)
    # time objects do not support arithmetic, anchor them on an arbitrary day
    anchor = date.min
    current = datetime.combine(anchor, slot.start_time)
    end = datetime.combine(anchor, slot.end_time)

    while current < end:
        yield current.time()
        current += step


def merge_bookable_times(slots, granularity=DEFAULT_GRANULARITY_MINUTES):
    times = []
    for slot in slots:
        times.extend(generate_bookable_times(slot, granularity))
    return sorted(times)
