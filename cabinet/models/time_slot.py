from datetime import datetime

from cabinet.extensions import db
from cabinet.models.day_of_week import DayOfWeek

class TimeSlot(db.Model):
    """A doctor's weekly availability window, e.g. every Monday 09:00-12:00."""

    __tablename__ = "time_slot"
    __table_args__ = (
        # Deactivated slots keep their row but give up their start time
        db.Index(
            "uq_time_slot_doctor_day_start_active",
            "doctor_id",
            "day_of_week",
            "start_time",
            unique=True,
            sqlite_where=db.text("is_active = 1"),
            postgresql_where=db.text("is_active"),
        ),
    )

    time_slot_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey("doctor.doctor_id"), nullable=False, index=True)
    day_of_week = db.Column(db.Enum(DayOfWeek), nullable=False)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)
    duration = db.Column(db.Integer, nullable=False, default=30)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    doctor = db.relationship("Doctor", back_populates="time_slots")

    def __repr__(self):
        return (
            f"<TimeSlot Doctor={self.doctor_id} "
            f"{self.day_of_week.value} {self.start_time}-{self.end_time}>"
        )
