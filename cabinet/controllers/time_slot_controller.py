from flask import Blueprint, jsonify, request

from cabinet.controllers import get_availability_service, get_booking_service
from cabinet.controllers.serializers import (
    parse_bool,
    parse_date,
    parse_enum,
    parse_int,
    parse_time,
    time_slot_to_dict,
    times_to_list,
)
from cabinet.models.day_of_week import DayOfWeek

time_slot_bp = Blueprint("time_slot", __name__)


def _slot_payload(data):
    return {
        "day_of_week": parse_enum(DayOfWeek, data.get("day_of_week"), "day_of_week"),
        "start_time": parse_time(data.get("start"), "start"),
        "end_time": parse_time(data.get("end"), "end"),
    }


# region TimeSlots
@time_slot_bp.route("/doctors/<int:doctor_id>/time-slots", methods=["POST"])
def create_time_slot(doctor_id):
    data = request.get_json(silent=True) or {}
    slot = get_availability_service().create_time_slot(
        doctor_id,
        duration=parse_int(data.get("duration", 30), "duration"),
        **_slot_payload(data),
    )
    return jsonify(time_slot_to_dict(slot)), 201


@time_slot_bp.route("/doctors/<int:doctor_id>/time-slots", methods=["GET"])
def list_time_slots(doctor_id):
    service = get_availability_service()
    day = request.args.get("day")

    if day:
        slots = service.get_time_slots_by_doctor_and_day(doctor_id, parse_enum(DayOfWeek, day, "day"))
    else:
        slots = service.get_time_slots_by_doctor(doctor_id)

    return jsonify([time_slot_to_dict(s) for s in slots])


@time_slot_bp.route("/time-slots/<int:time_slot_id>", methods=["GET"])
def get_time_slot(time_slot_id):
    return jsonify(time_slot_to_dict(get_availability_service().get_time_slot(time_slot_id)))


@time_slot_bp.route("/time-slots/<int:time_slot_id>", methods=["PUT"])
def update_time_slot(time_slot_id):
    data = request.get_json(silent=True) or {}
    duration = data.get("duration")
    is_active = data.get("is_active")
    slot = get_availability_service().update_time_slot(
        time_slot_id,
        duration=parse_int(duration, "duration") if duration is not None else None,
        is_active=parse_bool(is_active, "is_active") if is_active is not None else None,
        **_slot_payload(data),
    )
    return jsonify(time_slot_to_dict(slot))


@time_slot_bp.route("/time-slots/<int:time_slot_id>", methods=["DELETE"])
def delete_time_slot(time_slot_id):
    get_availability_service().delete_time_slot(time_slot_id)
    return "", 204
# endregion

# region AvailableTimes
@time_slot_bp.route("/doctors/<int:doctor_id>/available-times")
def available_times(doctor_id):
    day = parse_date(request.args.get("date"))
    times = get_booking_service().get_bookable_times_for_date(doctor_id, day)
    return jsonify({"doctor_id": doctor_id, "date": day.isoformat(), "times": times_to_list(times)})
# endregion
