from datetime import timedelta

from cabinet.extensions import db
from cabinet.models.appointment import MAX_DURATION_MINUTES, Appointment
from cabinet.models.appointment_status import VACATED_STATUSES


class AppointmentRepository:
    """Persistence for dated appointments."""

    @staticmethod
    def find_by_id(appointment_id):
        return db.session.get(Appointment, appointment_id)

    @staticmethod
    def find_by_patient(patient_id):
        return (
            Appointment.query.filter_by(patient_id=patient_id)
            .order_by(Appointment.date_time.desc())
            .all()
        )

    @staticmethod
    def find_by_doctor(doctor_id):
        return (
            Appointment.query.filter_by(doctor_id=doctor_id)
            .order_by(Appointment.date_time.desc())
            .all()
        )

    @staticmethod
    def find_by_doctor_and_date_range(doctor_id, start, end, active_only=True):
        """Appointments of a doctor starting in [start, end)."""
        query = Appointment.query.filter(
            Appointment.doctor_id == doctor_id,
            Appointment.date_time >= start,
            Appointment.date_time < end,
        )
        if active_only:
            query = query.filter(Appointment.status.notin_(VACATED_STATUSES))
        return query.order_by(Appointment.date_time).all()

    @staticmethod
    def find_conflicting(doctor_id, start, end, exclude_appointment_id=None):
        """Active appointments of a doctor whose interval intersects [start, end)."""
        query = Appointment.query.filter(
            Appointment.doctor_id == doctor_id,
            Appointment.status.notin_(VACATED_STATUSES),
            Appointment.date_time < end,
            Appointment.date_time > start - timedelta(minutes=MAX_DURATION_MINUTES),
        )
        if exclude_appointment_id is not None:
            query = query.filter(Appointment.appointment_id != exclude_appointment_id)

        return [a for a in query.all() if a.end_time > start]

    @staticmethod
    def save(appointment):
        db.session.add(appointment)
        db.session.flush()
        return appointment
