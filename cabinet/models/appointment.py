from datetime import datetime, timedelta

from cabinet.extensions import db
from cabinet.models.appointment_status import AppointmentStatus, CancelledBy, VACATED_STATUSES

ACTIVE_ROWS = "status NOT IN ('CANCELLED', 'NO_SHOW')"

MIN_DURATION_MINUTES = 15
# AppointmentRepository.find_conflicting narrows its scan by this bound
MAX_DURATION_MINUTES = 120

class Appointment(db.Model):
    __tablename__ = "appointment"
    __table_args__ = (
        # Last line of defence against two concurrent bookings at the same instant
        db.Index(
            "uq_appointment_doctor_datetime_active",
            "doctor_id",
            "date_time",
            unique=True,
            sqlite_where=db.text(ACTIVE_ROWS),
            postgresql_where=db.text(ACTIVE_ROWS),
        ),
    )

    appointment_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    patient_id = db.Column(db.Integer, db.ForeignKey("patient.patient_id"), nullable=False, index=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey("doctor.doctor_id"), nullable=False, index=True)
    date_time = db.Column(db.DateTime, nullable=False)
    duration = db.Column(db.Integer, nullable=False, default=30)
    reason = db.Column(db.String(500), nullable=True)
    status = db.Column(db.Enum(AppointmentStatus), nullable=False, default=AppointmentStatus.PENDING)

    cancelled_by = db.Column(db.Enum(CancelledBy), nullable=True)
    cancellation_reason = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    patient = db.relationship("Patient", back_populates="appointments")
    doctor = db.relationship("Doctor", back_populates="appointments")

    notifications = db.relationship("Notification", back_populates="appointment", cascade="all, delete-orphan")

    @property
    def end_time(self):
        return self.date_time + timedelta(minutes=self.duration)

    @property
    def is_active(self):
        return self.status not in VACATED_STATUSES

    def __repr__(self):
        return f"<Appointment {self.appointment_id} {self.date_time} {self.status.value}>"
