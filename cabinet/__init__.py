import logging

from flask import Flask, jsonify

from .config import Config
from .extensions import db
from .exceptions import ConflictError, InvalidInputError, ResourceNotFoundError
from cabinet.models.user import User
from cabinet.models.patient import Patient
from cabinet.models.doctor import Doctor
from cabinet.models.time_slot import TimeSlot
from cabinet.models.appointment import Appointment
from cabinet.models.notification import Notification


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db.init_app(app)

    with app.app_context():
        db.create_all()

    from .controllers.time_slot_controller import time_slot_bp
    from .controllers.appointment_controller import appointment_bp

    app.register_blueprint(time_slot_bp)
    app.register_blueprint(appointment_bp)

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(ResourceNotFoundError)
    def handle_not_found(error):
        return jsonify({
            "error": "Not Found",
            "message": str(error),
            "resource": error.resource_name,
            "field": error.field_name,
            "value": error.field_value,
        }), 404

    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(error):
        return jsonify({"error": "Bad Request", "message": str(error), "field": error.field}), 400

    @app.errorhandler(ConflictError)
    def handle_conflict(error):
        return jsonify({"error": "Conflict", "message": str(error)}), 409
