from typing import List, Optional
from sqlalchemy import func
from sqlmodel import Session, select

from .....db.models import Doctor
from .....application.ports.doctor_repo import DoctorRepository, DoctorDto
from .....utils import LIKE_ESCAPE, contains_pattern, join_slots, split_slots


class SqlDoctorRepository(DoctorRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, d: Doctor) -> DoctorDto:
        return DoctorDto(
            id=d.id,
            name=d.name,
            specialty=d.specialty,
            email=d.email,
            phone=d.phone,
            available_times=split_slots(d.available_times),
        )

    def find_by_id(self, doctor_id: int) -> Optional[DoctorDto]:
        d = self.session.get(Doctor, doctor_id)
        return self._to_dto(d) if d else None

    def find_by_email(self, email: str) -> Optional[DoctorDto]:
        d = self.session.exec(select(Doctor).where(Doctor.email == email)).first()
        return self._to_dto(d) if d else None

    def find_all(self) -> List[DoctorDto]:
        rows = self.session.exec(select(Doctor).order_by(Doctor.id)).all()
        return [self._to_dto(r) for r in rows]

    def exists_by_id(self, doctor_id: int) -> bool:
        return self.session.get(Doctor, doctor_id) is not None

    def save(self, doctor: DoctorDto) -> DoctorDto:
        d = self.session.get(Doctor, doctor.id) if doctor.id is not None else None
        if d is None:
            d = Doctor(email=doctor.email, name=doctor.name, specialty=doctor.specialty)
        d.name = doctor.name
        d.specialty = doctor.specialty
        d.email = doctor.email
        d.phone = doctor.phone
        d.available_times = join_slots(doctor.available_times)
        self.session.add(d)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(d)
        return self._to_dto(d)

    def delete_by_id(self, doctor_id: int) -> None:
        d = self.session.get(Doctor, doctor_id)
        if not d:
            return
        self.session.delete(d)
        self.session.commit()

    def find_by_name_substring(self, name: str) -> List[DoctorDto]:
        rows = self.session.exec(
            select(Doctor).where(Doctor.name.ilike(contains_pattern(name), escape=LIKE_ESCAPE)).order_by(Doctor.id)
        ).all()
        return [self._to_dto(r) for r in rows]

    def find_by_specialty(self, specialty: str) -> List[DoctorDto]:
        rows = self.session.exec(
            select(Doctor).where(func.lower(Doctor.specialty) == specialty.lower()).order_by(Doctor.id)
        ).all()
        return [self._to_dto(r) for r in rows]

    def find_by_name_and_specialty(self, name: str, specialty: str) -> List[DoctorDto]:
        rows = self.session.exec(
            select(Doctor)
            .where(Doctor.name.ilike(contains_pattern(name), escape=LIKE_ESCAPE))
            .where(func.lower(Doctor.specialty) == specialty.lower())
            .order_by(Doctor.id)
        ).all()
        return [self._to_dto(r) for r in rows]
