from cabinet.extensions import db

class Doctor(db.Model):
    __tablename__ = "doctor"

    doctor_id = db.Column(db.Integer, db.ForeignKey("users.user_id"), primary_key=True)
    specialization = db.Column(db.String(150), nullable=True)
    licence_no = db.Column(db.String(100), nullable=True)

    user = db.relationship("User", back_populates="doctor_profile", uselist=False)

    time_slots = db.relationship("TimeSlot", back_populates="doctor", cascade="all, delete-orphan")
    appointments = db.relationship("Appointment", back_populates="doctor")

    def __repr__(self):
        return f"<Doctor {self.doctor_id}, License: {self.licence_no}>"
