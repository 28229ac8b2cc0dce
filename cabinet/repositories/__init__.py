from cabinet.repositories.time_slot_repository import TimeSlotRepository
from cabinet.repositories.appointment_repository import AppointmentRepository
