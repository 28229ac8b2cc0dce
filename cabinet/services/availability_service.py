import logging

from sqlalchemy.exc import IntegrityError

from cabinet.exceptions import InvalidInputError, ResourceNotFoundError, TimeSlotConflictError
from cabinet.extensions import unit_of_work
from cabinet.models.day_of_week import DayOfWeek
from cabinet.models.time_slot import TimeSlot
from cabinet.repositories import TimeSlotRepository
from cabinet.scheduling.overlap import has_overlap
from cabinet.scheduling.slots import DEFAULT_GRANULARITY_MINUTES, merge_bookable_times
from cabinet.services import directory

logger = logging.getLogger(__name__)

MIN_SLOT_DURATION = 15
MAX_SLOT_DURATION = 120


def validate_window(start_time, end_time):
    if start_time >= end_time:
        raise InvalidInputError("Start time must be before end time.", field="start_time")


def validate_duration(duration):
    if not MIN_SLOT_DURATION <= duration <= MAX_SLOT_DURATION:
        raise InvalidInputError(
            f"Duration must be between {MIN_SLOT_DURATION} and {MAX_SLOT_DURATION} minutes.",
            field="duration",
        )


class AvailabilityService:
    """Recurring weekly availability of doctors."""

    def __init__(self, repository=None, granularity=DEFAULT_GRANULARITY_MINUTES):
        self.repository = repository or TimeSlotRepository()
        self.granularity = granularity

    def _get_or_404(self, time_slot_id):
        time_slot = self.repository.find_by_id(time_slot_id)
        if time_slot is None:
            raise ResourceNotFoundError("Time slot", "id", time_slot_id)
        return time_slot

    def _save(self, time_slot):
        try:
            return self.repository.save(time_slot)
        except IntegrityError:
            # another writer got the same (doctor, day, start) in first
            raise TimeSlotConflictError(time_slot.day_of_week, time_slot.start_time, time_slot.end_time)

    def create_time_slot(self, doctor_id, day_of_week, start_time, end_time, duration=30):
        with unit_of_work():
            doctor = directory.get_doctor_by_id(doctor_id, for_update=True)
            validate_window(start_time, end_time)
            validate_duration(duration)

            if has_overlap(self.repository, doctor.doctor_id, day_of_week, start_time, end_time):
                logger.warning(
                    "Rejected time slot for doctor %s on %s %s-%s: overlap",
                    doctor_id, day_of_week.value, start_time, end_time,
                )
                raise TimeSlotConflictError(day_of_week, start_time, end_time)

            time_slot = self._save(
                TimeSlot(
                    doctor_id=doctor.doctor_id,
                    day_of_week=day_of_week,
                    start_time=start_time,
                    end_time=end_time,
                    duration=duration,
                    is_active=True,
                )
            )

        logger.info("Created time slot %s for doctor %s", time_slot.time_slot_id, doctor_id)
        return time_slot

    def update_time_slot(self, time_slot_id, day_of_week, start_time, end_time, duration=None, is_active=None):
        with unit_of_work():
            time_slot = self._get_or_404(time_slot_id)
            directory.get_doctor_by_id(time_slot.doctor_id, for_update=True)
            validate_window(start_time, end_time)
            if duration is not None:
                validate_duration(duration)

            will_be_active = time_slot.is_active if is_active is None else is_active
            if will_be_active and has_overlap(
                self.repository,
                time_slot.doctor_id,
                day_of_week,
                start_time,
                end_time,
                exclude_slot_id=time_slot.time_slot_id,
            ):
                logger.warning(
                    "Rejected update of time slot %s to %s %s-%s: overlap",
                    time_slot_id, day_of_week.value, start_time, end_time,
                )
                raise TimeSlotConflictError(day_of_week, start_time, end_time)

            time_slot.day_of_week = day_of_week
            time_slot.start_time = start_time
            time_slot.end_time = end_time
            if duration is not None:
                time_slot.duration = duration
            time_slot.is_active = will_be_active
            self._save(time_slot)

        logger.info("Updated time slot %s", time_slot_id)
        return time_slot

    def delete_time_slot(self, time_slot_id):
        with unit_of_work():
            time_slot = self._get_or_404(time_slot_id)
            self.repository.delete(time_slot)

        logger.info("Deleted time slot %s", time_slot_id)

    def get_time_slot(self, time_slot_id):
        return self._get_or_404(time_slot_id)

    def get_time_slots_by_doctor(self, doctor_id):
        doctor = directory.get_doctor_by_id(doctor_id)
        return self.repository.find_by_doctor(doctor.doctor_id)

    def get_time_slots_by_doctor_and_day(self, doctor_id, day_of_week):
        doctor = directory.get_doctor_by_id(doctor_id)
        return self.repository.find_by_doctor_and_day(doctor.doctor_id, day_of_week, active_only=False)

    def get_bookable_times_for_date(self, doctor_id, day):
        """Every start time the doctor's recurring slots offer on ``day``,
        including times that are already booked."""
        doctor = directory.get_doctor_by_id(doctor_id)
        day_of_week = DayOfWeek.from_date(day)
        slots = self.repository.find_by_doctor_and_day(doctor.doctor_id, day_of_week, active_only=True)
        return merge_bookable_times(slots, self.granularity)
