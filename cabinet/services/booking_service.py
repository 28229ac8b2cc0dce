import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

from cabinet.exceptions import (
    AppointmentConflictError,
    InvalidInputError,
    InvalidStatusTransitionError,
    ResourceNotFoundError,
)
from cabinet.extensions import unit_of_work
from cabinet.models.appointment import MAX_DURATION_MINUTES, MIN_DURATION_MINUTES, Appointment
from cabinet.models.appointment_status import OPEN_STATUSES, AppointmentStatus, CancelledBy
from cabinet.repositories import AppointmentRepository
from cabinet.services import directory
from cabinet.services.availability_service import AvailabilityService
from cabinet.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 500


class BookingService:
    """Books, reschedules and cancels appointments without double-booking a doctor.

    Every mutation runs in a single unit of work: the availability check,
    the appointment write and the queued notifications are committed
    together or not at all.
    """

    def __init__(
        self,
        availability_service=None,
        repository=None,
        notifications=None,
        clock=datetime.now,
        default_duration=30,
    ):
        self.clock = clock
        self.availability_service = availability_service or AvailabilityService()
        self.repository = repository or AppointmentRepository()
        self.notifications = notifications or NotificationService(clock)
        self.default_duration = default_duration

    # region Helpers
    def _get_or_404(self, appointment_id):
        appointment = self.repository.find_by_id(appointment_id)
        if appointment is None:
            raise ResourceNotFoundError("Appointment", "id", appointment_id)
        return appointment

    def _validate_duration(self, duration):
        if not MIN_DURATION_MINUTES <= duration <= MAX_DURATION_MINUTES:
            raise InvalidInputError(
                f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes.",
                field="duration",
            )

    def _validate_text(self, value, field):
        if value is not None and len(value) > MAX_TEXT_LENGTH:
            raise InvalidInputError(f"{field} cannot exceed {MAX_TEXT_LENGTH} characters.", field=field)

    def _validate_future(self, date_time):
        if date_time <= self.clock():
            raise InvalidInputError("The appointment must be in the future.", field="date_time")

    def _require_open(self, appointment, action):
        if appointment.status not in OPEN_STATUSES:
            raise InvalidStatusTransitionError(appointment.appointment_id, appointment.status, action)

    def _ensure_available(self, doctor, date_time, duration, exclude_appointment_id=None):
        if not self.is_slot_available(doctor.doctor_id, date_time, duration, exclude_appointment_id):
            logger.warning(
                "Rejected booking for doctor %s at %s: slot taken",
                doctor.doctor_id, date_time.isoformat(),
            )
            raise AppointmentConflictError(doctor.name, date_time)

    def _save(self, appointment, doctor):
        try:
            return self.repository.save(appointment)
        except IntegrityError:
            # lost the race against a concurrent booking at the same instant
            raise AppointmentConflictError(doctor.name, appointment.date_time)
    # endregion

    # region Availability
    def is_slot_available(self, doctor_id, date_time, duration=None, exclude_appointment_id=None):
        """True when no active appointment of the doctor intersects
        [date_time, date_time + duration)."""
        doctor = directory.get_doctor_by_id(doctor_id)
        if duration is None:
            duration = self.default_duration
        self._validate_duration(duration)
        end = date_time + timedelta(minutes=duration)
        conflicting = self.repository.find_conflicting(doctor.doctor_id, date_time, end, exclude_appointment_id)
        return not conflicting

    def get_bookable_times_for_date(self, doctor_id, day):
        candidates = self.availability_service.get_bookable_times_for_date(doctor_id, day)

        start_of_day = datetime.combine(day, datetime.min.time())
        end_of_day = start_of_day + timedelta(days=1)
        booked = self.repository.find_by_doctor_and_date_range(doctor_id, start_of_day, end_of_day)
        taken = {appointment.date_time.time() for appointment in booked}

        return [t for t in candidates if t not in taken]
    # endregion

    # region Booking
    def create_appointment(self, patient_id, doctor_id, date_time, reason=None, duration=None):
        if duration is None:
            duration = self.default_duration

        with unit_of_work():
            patient = directory.get_patient_by_id(patient_id)
            doctor = directory.get_doctor_by_id(doctor_id, for_update=True)
            self._validate_duration(duration)
            self._validate_text(reason, "reason")
            self._validate_future(date_time)
            self._ensure_available(doctor, date_time, duration)

            appointment = self._save(
                Appointment(
                    patient_id=patient.patient_id,
                    doctor_id=doctor.doctor_id,
                    date_time=date_time,
                    duration=duration,
                    reason=reason,
                    status=AppointmentStatus.PENDING,
                ),
                doctor,
            )

            self.notifications.confirmation(appointment, patient, doctor)
            self.notifications.reminder(appointment, patient, doctor)

        logger.info(
            "Booked appointment %s for patient %s with doctor %s at %s",
            appointment.appointment_id, patient_id, doctor_id, date_time.isoformat(),
        )
        return appointment

    def update_appointment(self, appointment_id, date_time=None, reason=None):
        with unit_of_work():
            appointment = self._get_or_404(appointment_id)
            self._validate_text(reason, "reason")

            if date_time is not None and date_time != appointment.date_time:
                self._require_open(appointment, "reschedule")
                doctor = directory.get_doctor_by_id(appointment.doctor_id, for_update=True)
                patient = directory.get_patient_by_id(appointment.patient_id)
                self._validate_future(date_time)
                self._ensure_available(doctor, date_time, appointment.duration, appointment.appointment_id)

                appointment.date_time = date_time
                self._save(appointment, doctor)
                self.notifications.discard_pending_reminders(appointment)
                self.notifications.modification(appointment, patient, doctor, "modified")
                self.notifications.reminder(appointment, patient, doctor)

            if reason is not None:
                appointment.reason = reason

            self.repository.save(appointment)

        logger.info("Updated appointment %s", appointment_id)
        return appointment

    def move_appointment(self, appointment_id, new_doctor_id, new_date_time):
        with unit_of_work():
            appointment = self._get_or_404(appointment_id)
            new_doctor = directory.get_doctor_by_id(new_doctor_id, for_update=True)
            patient = directory.get_patient_by_id(appointment.patient_id)
            self._require_open(appointment, "move")
            self._validate_future(new_date_time)
            self._ensure_available(new_doctor, new_date_time, appointment.duration, appointment.appointment_id)

            appointment.doctor_id = new_doctor.doctor_id
            appointment.date_time = new_date_time
            self._save(appointment, new_doctor)

            self.notifications.discard_pending_reminders(appointment)
            self.notifications.modification(appointment, patient, new_doctor, "moved")
            self.notifications.reminder(appointment, patient, new_doctor)

        logger.info(
            "Moved appointment %s to doctor %s at %s",
            appointment_id, new_doctor_id, new_date_time.isoformat(),
        )
        return appointment
    # endregion

    # region Status transitions
    def cancel_appointment(self, appointment_id, cancelled_by, reason=None):
        with unit_of_work():
            appointment = self._get_or_404(appointment_id)
            if not isinstance(cancelled_by, CancelledBy):
                raise InvalidInputError("cancelled_by must be PATIENT, DOCTOR or ADMIN.", field="cancelled_by")
            self._validate_text(reason, "cancellation_reason")
            self._require_open(appointment, "cancel")

            appointment.status = AppointmentStatus.CANCELLED
            appointment.cancelled_by = cancelled_by
            if reason is not None:
                appointment.cancellation_reason = reason

            patient = directory.get_patient_by_id(appointment.patient_id)
            doctor = directory.get_doctor_by_id(appointment.doctor_id)
            self.notifications.discard_pending_reminders(appointment)
            self.notifications.cancellation(appointment, patient, doctor, cancelled_by)
            self.repository.save(appointment)

        logger.info("Appointment %s cancelled by %s", appointment_id, cancelled_by.value)
        return appointment

    def _transition(self, appointment_id, allowed, target, action):
        with unit_of_work():
            appointment = self._get_or_404(appointment_id)
            if appointment.status not in allowed:
                raise InvalidStatusTransitionError(appointment_id, appointment.status, action)
            appointment.status = target
            self.repository.save(appointment)

        logger.info("Appointment %s is now %s", appointment_id, target.value)
        return appointment

    def confirm_appointment(self, appointment_id):
        return self._transition(
            appointment_id, (AppointmentStatus.PENDING,), AppointmentStatus.CONFIRMED, "confirm"
        )

    def complete_appointment(self, appointment_id):
        return self._transition(appointment_id, OPEN_STATUSES, AppointmentStatus.COMPLETED, "complete")

    def mark_no_show(self, appointment_id):
        return self._transition(appointment_id, OPEN_STATUSES, AppointmentStatus.NO_SHOW, "mark as no-show")
    # endregion

    # region Queries
    def get_appointment(self, appointment_id):
        return self._get_or_404(appointment_id)

    def get_appointments_by_patient(self, patient_id):
        patient = directory.get_patient_by_id(patient_id)
        return self.repository.find_by_patient(patient.patient_id)

    def get_appointments_by_doctor(self, doctor_id):
        doctor = directory.get_doctor_by_id(doctor_id)
        return self.repository.find_by_doctor(doctor.doctor_id)
    # endregion
