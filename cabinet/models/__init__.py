from cabinet.models.roles import RoleEnum
from cabinet.models.day_of_week import DayOfWeek
from cabinet.models.appointment_status import AppointmentStatus, CancelledBy
from cabinet.models.user import User
from cabinet.models.doctor import Doctor
from cabinet.models.patient import Patient
from cabinet.models.time_slot import TimeSlot
from cabinet.models.appointment import Appointment
from cabinet.models.notification import Notification, NotificationType
