from datetime import datetime, time

from cabinet.exceptions import InvalidInputError


def parse_time(value, field):
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be in HH:MM format.", field=field)


def parse_date(value, field="date"):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be in YYYY-MM-DD format.", field=field)


def parse_datetime(value, field="date_time"):
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be an ISO 8601 date-time.", field=field)

    # appointments are stored as the office's local wall-clock time
    if parsed.tzinfo is not None:
        raise InvalidInputError(f"{field} must not carry a UTC offset.", field=field)
    return parsed


def parse_int(value, field):
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be an integer.", field=field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be an integer.", field=field)


def parse_bool(value, field):
    if not isinstance(value, bool):
        raise InvalidInputError(f"{field} must be true or false.", field=field)
    return value


def parse_enum(enum_cls, value, field):
    try:
        return enum_cls[str(value).upper()]
    except KeyError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidInputError(f"{field} must be one of: {allowed}.", field=field)


def format_time(value: time):
    return value.strftime("%H:%M")


def time_slot_to_dict(slot):
    return {
        "id": slot.time_slot_id,
        "doctor_id": slot.doctor_id,
        "day_of_week": slot.day_of_week.value,
        "start": format_time(slot.start_time),
        "end": format_time(slot.end_time),
        "duration": slot.duration,
        "is_active": slot.is_active,
    }


def appointment_to_dict(appointment):
    return {
        "id": appointment.appointment_id,
        "patient_id": appointment.patient_id,
        "doctor_id": appointment.doctor_id,
        "date_time": appointment.date_time.isoformat(),
        "duration": appointment.duration,
        "reason": appointment.reason,
        "status": appointment.status.value,
        "cancelled_by": appointment.cancelled_by.value if appointment.cancelled_by else None,
        "cancellation_reason": appointment.cancellation_reason,
    }


def times_to_list(times):
    return [format_time(t) for t in times]
