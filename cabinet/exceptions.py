class CabinetError(Exception):
    """Base class for errors the scheduling core reports to its caller."""


class ResourceNotFoundError(CabinetError):
    def __init__(self, resource_name, field_name, field_value):
        super().__init__(f"{resource_name} not found with {field_name}: '{field_value}'")
        self.resource_name = resource_name
        self.field_name = field_name
        self.field_value = field_value


class InvalidInputError(CabinetError):
    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class InvalidStatusTransitionError(InvalidInputError):
    def __init__(self, appointment_id, status, action):
        super().__init__(
            f"Cannot {action} appointment {appointment_id} with status {status.value}",
            field="status",
        )
        self.appointment_id = appointment_id
        self.status = status
        self.action = action


class ConflictError(CabinetError):
    pass


class TimeSlotConflictError(ConflictError):
    def __init__(self, day_of_week, start_time, end_time):
        super().__init__(
            f"A time slot already exists on {day_of_week.value} "
            f"between {start_time.strftime('%H:%M')} and {end_time.strftime('%H:%M')}"
        )
        self.day_of_week = day_of_week
        self.start_time = start_time
        self.end_time = end_time


class AppointmentConflictError(ConflictError):
    def __init__(self, doctor_name, date_time):
        super().__init__(
            f"The slot on {date_time.strftime('%Y-%m-%d %H:%M')} is already booked for Dr. {doctor_name}"
        )
        self.doctor_name = doctor_name
        self.date_time = date_time
