import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///cabinet.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Step between bookable start times, independent of TimeSlot.duration
    SLOT_GRANULARITY_MINUTES = int(os.getenv("SLOT_GRANULARITY_MINUTES", "30"))
    DEFAULT_APPOINTMENT_DURATION = int(os.getenv("DEFAULT_APPOINTMENT_DURATION", "30"))
    REMINDER_LEAD_HOURS = int(os.getenv("REMINDER_LEAD_HOURS", "24"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SLOT_GRANULARITY_MINUTES = 30
    DEFAULT_APPOINTMENT_DURATION = 30
    REMINDER_LEAD_HOURS = 24
