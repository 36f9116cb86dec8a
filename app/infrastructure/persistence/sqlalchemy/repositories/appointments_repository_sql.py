from typing import List, Optional
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .....db.models import Appointment, Patient, Prescription
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
    SlotAlreadyBookedError,
)
from .....utils import LIKE_ESCAPE, contains_pattern


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _appt_to_dto(self, a: Appointment, patient_name: Optional[str] = None) -> AppointmentDto:
        return AppointmentDto(
            id=a.id,
            doctor_id=a.doctor_id,
            patient_id=a.patient_id,
            appointment_time=a.appointment_time,
            status=a.status,
            patient_name=patient_name,
            created_at=a.created_at,
        )

    def _with_patient_names(self, query) -> List[AppointmentDto]:
        rows = self.session.exec(query).all()
        return [self._appt_to_dto(a, name) for a, name in rows]

    def _doctor_day_query(self, doctor_id: int, start: datetime, end: datetime):
        return (
            select(Appointment, Patient.name)
            .join(Patient, Patient.id == Appointment.patient_id, isouter=True)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.appointment_time >= start)
            .where(Appointment.appointment_time <= end)
            .order_by(Appointment.appointment_time)
        )

    def find_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        a = self.session.get(Appointment, appointment_id)
        return self._appt_to_dto(a) if a else None

    def save(self, appointment: AppointmentDto) -> AppointmentDto:
        a = self.session.get(Appointment, appointment.id) if appointment.id is not None else None
        if a is None:
            a = Appointment(
                doctor_id=appointment.doctor_id,
                patient_id=appointment.patient_id,
                appointment_time=appointment.appointment_time,
            )
        a.doctor_id = appointment.doctor_id
        a.patient_id = appointment.patient_id
        a.appointment_time = appointment.appointment_time
        a.status = int(appointment.status)
        self.session.add(a)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if _is_unique_violation(e):
                raise SlotAlreadyBookedError(
                    f"Doctor {appointment.doctor_id} already has an appointment at {appointment.appointment_time.isoformat()}"
                ) from e
            raise
        self.session.refresh(a)
        return self._appt_to_dto(a)

    def delete(self, appointment: AppointmentDto) -> None:
        a = self.session.get(Appointment, appointment.id)
        if not a:
            return
        for p in self.session.exec(select(Prescription).where(Prescription.appointment_id == a.id)).all():
            self.session.delete(p)
        self.session.delete(a)
        self.session.commit()

    def find_by_doctor_and_time_range(self, doctor_id: int, start: datetime, end: datetime) -> List[AppointmentDto]:
        return self._with_patient_names(self._doctor_day_query(doctor_id, start, end))

    def find_by_doctor_and_time_range_and_patient_name_substring(self, doctor_id: int, patient_name: str, start: datetime, end: datetime) -> List[AppointmentDto]:
        query = self._doctor_day_query(doctor_id, start, end).where(Patient.name.ilike(contains_pattern(patient_name), escape=LIKE_ESCAPE))
        return self._with_patient_names(query)

    def find_by_patient_id(self, patient_id: int) -> List[AppointmentDto]:
        rows = self.session.exec(
            select(Appointment)
            .where(Appointment.patient_id == patient_id)
            .order_by(Appointment.appointment_time)
        ).all()
        return [self._appt_to_dto(r) for r in rows]

    def find_conflict(self, doctor_id: int, appointment_time: datetime) -> Optional[AppointmentDto]:
        a = self.session.exec(
            select(Appointment)
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.appointment_time == appointment_time)
        ).first()
        return self._appt_to_dto(a) if a else None

    def delete_by_doctor_id(self, doctor_id: int) -> int:
        appts = self.session.exec(select(Appointment).where(Appointment.doctor_id == doctor_id)).all()
        ids = [a.id for a in appts]
        if ids:
            for p in self.session.exec(select(Prescription).where(Prescription.appointment_id.in_(ids))).all():
                self.session.delete(p)
        for a in appts:
            self.session.delete(a)
        self.session.commit()
        return len(appts)
