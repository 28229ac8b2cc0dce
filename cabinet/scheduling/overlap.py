"""Half-open interval overlap rules for recurring time slots.

Two windows [a_start, a_end) and [b_start, b_end) overlap when
``a_start < b_end and a_end > b_start``. Windows that merely touch
(09:00-12:00 and 12:00-14:00) do not overlap.
"""


def intervals_overlap(start_a, end_a, start_b, end_b):
    return start_a < end_b and end_a > start_b


def find_overlapping(slots, start_time, end_time, exclude_slot_id=None):
    """Return the slots whose window intersects [start_time, end_time).

    ``slots`` must already be narrowed to one doctor and one day of week.
    """
    return [
        slot
        for slot in slots
        if slot.time_slot_id != exclude_slot_id
        and intervals_overlap(start_time, end_time, slot.start_time, slot.end_time)
    ]


def has_overlap(repository, doctor_id, day_of_week, start_time, end_time, exclude_slot_id=None):
    """Check a candidate window against the doctor's active slots for that day.

    The caller is responsible for rejecting start_time >= end_time first.
    """
    existing = repository.find_by_doctor_and_day(doctor_id, day_of_week, active_only=True)
    return bool(find_overlapping(existing, start_time, end_time, exclude_slot_id))
