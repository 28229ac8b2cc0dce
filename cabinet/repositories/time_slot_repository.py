from cabinet.extensions import db
from cabinet.models.day_of_week import DayOfWeek
from cabinet.models.time_slot import TimeSlot

WEEK_ORDER = {day: index for index, day in enumerate(DayOfWeek)}


class TimeSlotRepository:
    """Persistence for recurring weekly time slots."""

    @staticmethod
    def find_by_id(time_slot_id):
        return db.session.get(TimeSlot, time_slot_id)

    @staticmethod
    def find_by_doctor(doctor_id):
        slots = TimeSlot.query.filter_by(doctor_id=doctor_id).all()
        return sorted(slots, key=lambda s: (WEEK_ORDER[s.day_of_week], s.start_time))

    @staticmethod
    def find_by_doctor_and_day(doctor_id, day_of_week, active_only=True):
        query = TimeSlot.query.filter_by(doctor_id=doctor_id, day_of_week=day_of_week)
        if active_only:
            query = query.filter(TimeSlot.is_active.is_(True))
        return query.order_by(TimeSlot.start_time).all()

    @staticmethod
    def save(time_slot):
        db.session.add(time_slot)
        db.session.flush()
        return time_slot

    @staticmethod
    def delete(time_slot):
        db.session.delete(time_slot)
        db.session.flush()
