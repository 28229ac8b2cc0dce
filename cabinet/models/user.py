from cabinet.extensions import db
from cabinet.models.roles import RoleEnum

class User(db.Model):
    __tablename__ = "users"

    user_id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    role = db.Column(db.Enum(RoleEnum), nullable=False)

    patient_profile = db.relationship("Patient", back_populates="user", uselist=False, lazy="select")
    doctor_profile = db.relationship("Doctor", back_populates="user", uselist=False, lazy="select")
    notifications = db.relationship("Notification", back_populates="user", lazy="dynamic")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<User {self.user_id} {self.email} ({self.role.value})>"
