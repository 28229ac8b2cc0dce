import re
from dataclasses import dataclass

from cabinet.extensions import db, unit_of_work
from cabinet.exceptions import InvalidInputError, ResourceNotFoundError
from cabinet.models.doctor import Doctor
from cabinet.models.patient import Patient
from cabinet.models.roles import RoleEnum
from cabinet.models.user import User

EMAIL_REGEX = r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"


@dataclass(frozen=True)
class DoctorInfo:
    doctor_id: int
    user_id: int
    name: str
    specialization: str = None


@dataclass(frozen=True)
class PatientInfo:
    patient_id: int
    user_id: int
    name: str


def is_valid_email(email):
    return re.match(EMAIL_REGEX, email or "") is not None


def _doctor_info(doctor):
    return DoctorInfo(
        doctor_id=doctor.doctor_id,
        user_id=doctor.user.user_id,
        name=doctor.user.full_name,
        specialization=doctor.specialization,
    )


def get_doctor_by_id(doctor_id, for_update=False):
    """Look up a doctor and return a flat snapshot.

    With ``for_update`` the doctor row stays locked until the surrounding
    transaction ends, which serializes bookings for that doctor on backends
    that support ``SELECT ... FOR UPDATE``.
    """
    query = db.select(Doctor).where(Doctor.doctor_id == doctor_id)
    if for_update:
        query = query.with_for_update()

    doctor = db.session.execute(query).scalar_one_or_none()
    if doctor is None:
        raise ResourceNotFoundError("Doctor", "id", doctor_id)
    return _doctor_info(doctor)


def get_patient_by_id(patient_id):
    patient = db.session.get(Patient, patient_id)
    if patient is None:
        raise ResourceNotFoundError("Patient", "id", patient_id)
    return PatientInfo(
        patient_id=patient.patient_id,
        user_id=patient.user.user_id,
        name=patient.user.full_name,
    )


def _create_user(email, first_name, last_name, role):
    if not is_valid_email(email):
        raise InvalidInputError("Invalid email format.", field="email")

    if User.query.filter_by(email=email).first():
        raise InvalidInputError("Email already exists.", field="email")

    user = User(email=email, first_name=first_name, last_name=last_name, role=role)
    db.session.add(user)
    db.session.flush()
    return user


def register_doctor(email, first_name, last_name, specialization=None, licence_no=None):
    with unit_of_work():
        user = _create_user(email, first_name, last_name, RoleEnum.DOCTOR)
        doctor = Doctor(doctor_id=user.user_id, specialization=specialization, licence_no=licence_no)
        db.session.add(doctor)

    return _doctor_info(doctor)


def register_patient(email, first_name, last_name, date_of_birth=None, phone=None, insurance_no=None):
    with unit_of_work():
        user = _create_user(email, first_name, last_name, RoleEnum.PATIENT)
        patient = Patient(
            patient_id=user.user_id,
            date_of_birth=date_of_birth,
            phone=phone,
            insurance_no=insurance_no,
        )
        db.session.add(patient)

    return PatientInfo(patient_id=patient.patient_id, user_id=user.user_id, name=user.full_name)
