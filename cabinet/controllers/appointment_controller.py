from flask import Blueprint, jsonify, request

from cabinet.controllers import get_booking_service
from cabinet.controllers.serializers import appointment_to_dict, parse_datetime, parse_enum, parse_int
from cabinet.exceptions import InvalidInputError
from cabinet.models.appointment_status import CancelledBy

appointment_bp = Blueprint("appointment", __name__)


def _require(data, field):
    value = data.get(field)
    if value is None:
        raise InvalidInputError(f"{field} is required.", field=field)
    return value


# region Appointments
@appointment_bp.route("/appointments", methods=["POST"])
def create_appointment():
    data = request.get_json(silent=True) or {}
    duration = data.get("duration")

    appointment = get_booking_service().create_appointment(
        patient_id=parse_int(_require(data, "patient_id"), "patient_id"),
        doctor_id=parse_int(_require(data, "doctor_id"), "doctor_id"),
        date_time=parse_datetime(_require(data, "date_time")),
        reason=data.get("reason"),
        duration=parse_int(duration, "duration") if duration is not None else None,
    )
    return jsonify(appointment_to_dict(appointment)), 201


@appointment_bp.route("/appointments/<int:appointment_id>", methods=["GET"])
def get_appointment(appointment_id):
    return jsonify(appointment_to_dict(get_booking_service().get_appointment(appointment_id)))


@appointment_bp.route("/appointments/<int:appointment_id>", methods=["PUT"])
def update_appointment(appointment_id):
    data = request.get_json(silent=True) or {}
    date_time = data.get("date_time")

    appointment = get_booking_service().update_appointment(
        appointment_id,
        date_time=parse_datetime(date_time) if date_time else None,
        reason=data.get("reason"),
    )
    return jsonify(appointment_to_dict(appointment))


@appointment_bp.route("/appointments/<int:appointment_id>/move", methods=["POST"])
def move_appointment(appointment_id):
    data = request.get_json(silent=True) or {}

    appointment = get_booking_service().move_appointment(
        appointment_id,
        new_doctor_id=parse_int(_require(data, "doctor_id"), "doctor_id"),
        new_date_time=parse_datetime(_require(data, "date_time")),
    )
    return jsonify(appointment_to_dict(appointment))


@appointment_bp.route("/appointments/<int:appointment_id>/cancel", methods=["POST"])
def cancel_appointment(appointment_id):
    data = request.get_json(silent=True) or {}

    appointment = get_booking_service().cancel_appointment(
        appointment_id,
        cancelled_by=parse_enum(CancelledBy, _require(data, "cancelled_by"), "cancelled_by"),
        reason=data.get("reason"),
    )
    return jsonify(appointment_to_dict(appointment))


@appointment_bp.route("/appointments/<int:appointment_id>/confirm", methods=["POST"])
def confirm_appointment(appointment_id):
    return jsonify(appointment_to_dict(get_booking_service().confirm_appointment(appointment_id)))


@appointment_bp.route("/appointments/<int:appointment_id>/complete", methods=["POST"])
def complete_appointment(appointment_id):
    return jsonify(appointment_to_dict(get_booking_service().complete_appointment(appointment_id)))


@appointment_bp.route("/appointments/<int:appointment_id>/no-show", methods=["POST"])
def mark_no_show(appointment_id):
    return jsonify(appointment_to_dict(get_booking_service().mark_no_show(appointment_id)))
# endregion

# region Listings
@appointment_bp.route("/patients/<int:patient_id>/appointments")
def patient_appointments(patient_id):
    appointments = get_booking_service().get_appointments_by_patient(patient_id)
    return jsonify([appointment_to_dict(a) for a in appointments])


@appointment_bp.route("/doctors/<int:doctor_id>/appointments")
def doctor_appointments(doctor_id):
    appointments = get_booking_service().get_appointments_by_doctor(doctor_id)
    return jsonify([appointment_to_dict(a) for a in appointments])


@appointment_bp.route("/doctors/<int:doctor_id>/availability")
def slot_availability(doctor_id):
    date_time = parse_datetime(request.args.get("date_time"))
    duration = request.args.get("duration")
    if duration is not None:
        duration = parse_int(duration, "duration")
    available = get_booking_service().is_slot_available(doctor_id, date_time, duration)
    return jsonify({"doctor_id": doctor_id, "date_time": date_time.isoformat(), "available": available})
# endregion
