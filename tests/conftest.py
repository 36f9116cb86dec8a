from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.application.ports.appointments_repo import AppointmentDto, SlotAlreadyBookedError
from app.application.ports.doctor_repo import DoctorDto
from app.application.ports.prescription_repo import PrescriptionDto
from app.db import models  # noqa: F401


class StoreDown(Exception):
    pass


class FakeDoctorRepo:
    def __init__(self):
        self.doctors: Dict[int, DoctorDto] = {}
        self._id = 1
        self.down = False

    def _check(self):
        if self.down:
            raise StoreDown("doctor store unavailable")

    def add(self, name: str, specialty: str = "Cardiology", slots: Optional[List[str]] = None, email: Optional[str] = None) -> DoctorDto:
        return self.save(DoctorDto(
            id=None,
            name=name,
            specialty=specialty,
            email=email or f"{name.lower().replace(' ', '.')}@clinic.test",
            available_times=list(slots or []),
        ))

    def find_by_id(self, doctor_id):
        self._check()
        return self.doctors.get(doctor_id)

    def find_by_email(self, email):
        self._check()
        return next((d for d in self.doctors.values() if d.email == email), None)

    def find_all(self):
        self._check()
        return list(self.doctors.values())

    def exists_by_id(self, doctor_id):
        self._check()
        return doctor_id in self.doctors

    def save(self, doctor):
        self._check()
        if doctor.id is None:
            doctor = replace(doctor, id=self._id)
            self._id += 1
        self.doctors[doctor.id] = doctor
        return doctor

    def delete_by_id(self, doctor_id):
        self._check()
        self.doctors.pop(doctor_id, None)

    def find_by_name_substring(self, name):
        self._check()
        return [d for d in self.doctors.values() if name.lower() in d.name.lower()]

    def find_by_specialty(self, specialty):
        self._check()
        return [d for d in self.doctors.values() if d.specialty.lower() == specialty.lower()]

    def find_by_name_and_specialty(self, name, specialty):
        return [d for d in self.find_by_name_substring(name) if d.specialty.lower() == specialty.lower()]


class FakeApptRepo:
    def __init__(self):
        self.appts: Dict[int, AppointmentDto] = {}
        self._id = 1
        self.down = False
        self.patient_names: Dict[int, str] = {}

    def _check(self):
        if self.down:
            raise StoreDown("appointment store unavailable")

    def add(self, doctor_id: int, patient_id: int, when: datetime, status: int = 0) -> AppointmentDto:
        return self.save(AppointmentDto(id=None, doctor_id=doctor_id, patient_id=patient_id, appointment_time=when, status=status))

    def find_by_id(self, appointment_id):
        self._check()
        return self.appts.get(appointment_id)

    def save(self, appointment):
        self._check()
        for other in self.appts.values():
            if (other.id != appointment.id
                    and other.doctor_id == appointment.doctor_id
                    and other.appointment_time == appointment.appointment_time):
                raise SlotAlreadyBookedError("taken")
        if appointment.id is None:
            appointment = replace(appointment, id=self._id)
            self._id += 1
        self.appts[appointment.id] = appointment
        return appointment

    def delete(self, appointment):
        self._check()
        self.appts.pop(appointment.id, None)

    def find_by_doctor_and_time_range(self, doctor_id, start, end):
        self._check()
        return [
            replace(a, patient_name=self.patient_names.get(a.patient_id))
            for a in self.appts.values()
            if a.doctor_id == doctor_id and start <= a.appointment_time <= end
        ]

    def find_by_doctor_and_time_range_and_patient_name_substring(self, doctor_id, patient_name, start, end):
        return [
            a for a in self.find_by_doctor_and_time_range(doctor_id, start, end)
            if a.patient_name and patient_name.lower() in a.patient_name.lower()
        ]

    def find_by_patient_id(self, patient_id):
        self._check()
        return [a for a in self.appts.values() if a.patient_id == patient_id]

    def find_conflict(self, doctor_id, appointment_time):
        self._check()
        return next(
            (a for a in self.appts.values() if a.doctor_id == doctor_id and a.appointment_time == appointment_time),
            None,
        )

    def delete_by_doctor_id(self, doctor_id):
        self._check()
        ids = [i for i, a in self.appts.items() if a.doctor_id == doctor_id]
        for i in ids:
            del self.appts[i]
        return len(ids)


class FakePrescriptionRepo:
    def __init__(self):
        self.items: Dict[int, PrescriptionDto] = {}
        self._id = 1

    def find_by_appointment_id(self, appointment_id):
        return self.items.get(appointment_id)

    def save(self, prescription):
        saved = replace(prescription, id=self._id, created_at=datetime.utcnow())
        self._id += 1
        self.items[saved.appointment_id] = saved
        return saved

    def delete_by_appointment_id(self, appointment_id):
        self.items.pop(appointment_id, None)


class FakeAudit:
    def __init__(self):
        self.entries = []

    def log(self, action, actor_id=None, appointment_id=None, success=True, details=None):
        self.entries.append((action, actor_id, appointment_id, success))


@pytest.fixture
def doctors():
    return FakeDoctorRepo()


@pytest.fixture
def appts():
    return FakeApptRepo()


@pytest.fixture
def prescriptions():
    return FakePrescriptionRepo()


@pytest.fixture
def audit():
    return FakeAudit()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session
