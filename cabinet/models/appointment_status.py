from enum import Enum

class AppointmentStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"
    COMPLETED = "COMPLETED"

# Appointments in these states no longer hold their slot
VACATED_STATUSES = (AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW)

# States from which cancel / complete / no-show / reschedule are allowed
OPEN_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


class CancelledBy(Enum):
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    ADMIN = "ADMIN"
