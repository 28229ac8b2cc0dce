import logging
from datetime import timedelta

from cabinet.extensions import db
from cabinet.models.appointment_status import CancelledBy
from cabinet.models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)

CANCELLED_BY_TEXT = {
    CancelledBy.PATIENT: "you",
    CancelledBy.DOCTOR: "the doctor",
    CancelledBy.ADMIN: "the administration",
}


def _when(appointment):
    return (
        f"{appointment.date_time.strftime('%Y-%m-%d')} "
        f"at {appointment.date_time.strftime('%H:%M')}"
    )


class NotificationService:
    """Queues appointment notifications as rows in the caller's session.

    Nothing is committed here: the rows belong to the same unit of work as
    the appointment change that produced them. Delivery happens elsewhere,
    once ``send_time`` has passed.
    """

    def __init__(self, clock, reminder_lead_hours=24):
        self.clock = clock
        self.reminder_lead = timedelta(hours=reminder_lead_hours)

    def _queue(self, user_id, appointment, kind, title, message, send_time):
        notification = Notification(
            user_id=user_id,
            appointment=appointment,
            type=kind,
            title=title,
            message=message,
            send_time=send_time,
        )
        db.session.add(notification)
        logger.debug("Queued %s notification for user %s", kind.value, user_id)
        return notification

    def confirmation(self, appointment, patient, doctor):
        return self._queue(
            patient.user_id,
            appointment,
            NotificationType.CONFIRMATION,
            "Appointment Confirmed",
            f"Your appointment with Dr. {doctor.name} on {_when(appointment)} has been registered.",
            self.clock(),
        )

    def reminder(self, appointment, patient, doctor):
        now = self.clock()
        send_time = max(appointment.date_time - self.reminder_lead, now)
        return self._queue(
            patient.user_id,
            appointment,
            NotificationType.REMINDER,
            "Appointment Reminder",
            f"Reminder: you have an appointment with Dr. {doctor.name} on {_when(appointment)}.",
            send_time,
        )

    def modification(self, appointment, patient, doctor, action):
        return self._queue(
            patient.user_id,
            appointment,
            NotificationType.MODIFICATION,
            "Appointment Updated",
            f"Your appointment has been {action}. New appointment with Dr. {doctor.name} on {_when(appointment)}.",
            self.clock(),
        )

    def cancellation(self, appointment, patient, doctor, cancelled_by):
        return self._queue(
            patient.user_id,
            appointment,
            NotificationType.CANCELLATION,
            "Appointment Canceled",
            f"Your appointment with Dr. {doctor.name} on {_when(appointment)} "
            f"has been canceled by {CANCELLED_BY_TEXT[cancelled_by]}.",
            self.clock(),
        )

    def discard_pending_reminders(self, appointment):
        """Drop reminders that have not been sent yet."""
        now = self.clock()
        pending = [
            n
            for n in appointment.notifications
            if n.type == NotificationType.REMINDER and n.send_time is not None and n.send_time > now
        ]
        for notification in pending:
            appointment.notifications.remove(notification)
        return len(pending)
