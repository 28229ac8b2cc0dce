from cabinet.extensions import db

class Patient(db.Model):
    """Patient profile attached one-to-one to a PATIENT user."""

    __tablename__ = "patient"

    patient_id = db.Column(db.Integer, db.ForeignKey("users.user_id"), primary_key=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    insurance_no = db.Column(db.String(100), nullable=True)

    user = db.relationship("User", back_populates="patient_profile", uselist=False)
    appointments = db.relationship(
        "Appointment", back_populates="patient", order_by="Appointment.date_time"
    )

    def __repr__(self):
        return f"<Patient {self.patient_id} phone={self.phone} insurance={self.insurance_no}>"
