"""Shared fixtures: an in-memory app, a couple of doctors and patients, and
services wired to a fixed clock."""

from datetime import datetime

import pytest

from cabinet import create_app
from cabinet.config import TestConfig
from cabinet.extensions import db
from cabinet.services import directory
from cabinet.services.availability_service import AvailabilityService
from cabinet.services.booking_service import BookingService
from cabinet.services.notification_service import NotificationService

NOW = datetime(2025, 12, 1, 8, 0)


def fixed_clock():
    return NOW


@pytest.fixture
def app():
    app = create_app(TestConfig)
    app.config["CLOCK"] = fixed_clock

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def doctor(app):
    return directory.register_doctor("house@clinic.com", "Gregory", "House", specialization="Diagnostics")


@pytest.fixture
def other_doctor(app):
    return directory.register_doctor("wilson@clinic.com", "James", "Wilson", specialization="Oncology")


@pytest.fixture
def patient(app):
    return directory.register_patient("jane@mail.com", "Jane", "Doe")


@pytest.fixture
def other_patient(app):
    return directory.register_patient("john@mail.com", "John", "Roe")


@pytest.fixture
def availability_service(app):
    return AvailabilityService(granularity=30)


@pytest.fixture
def booking_service(availability_service):
    return BookingService(
        availability_service=availability_service,
        notifications=NotificationService(fixed_clock, reminder_lead_hours=24),
        clock=fixed_clock,
    )
