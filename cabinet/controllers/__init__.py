from datetime import datetime

from flask import current_app

from cabinet.services.availability_service import AvailabilityService
from cabinet.services.booking_service import BookingService
from cabinet.services.notification_service import NotificationService


def get_availability_service():
    return AvailabilityService(granularity=current_app.config["SLOT_GRANULARITY_MINUTES"])


def get_booking_service():
    clock = current_app.config.get("CLOCK") or datetime.now
    return BookingService(
        availability_service=get_availability_service(),
        notifications=NotificationService(clock, current_app.config["REMINDER_LEAD_HOURS"]),
        clock=clock,
        default_duration=current_app.config["DEFAULT_APPOINTMENT_DURATION"],
    )
