from typing import Optional
from sqlalchemy import or_
from sqlmodel import Session, select

from .....db.models import Patient
from .....application.ports.patient_repo import PatientRepository, PatientDto


class SqlPatientRepository(PatientRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, p: Patient) -> PatientDto:
        return PatientDto(
            id=p.id,
            name=p.name,
            email=p.email,
            phone=p.phone,
            address=p.address,
        )

    def find_by_id(self, patient_id: int) -> Optional[PatientDto]:
        p = self.session.get(Patient, patient_id)
        return self._to_dto(p) if p else None

    def find_by_email(self, email: str) -> Optional[PatientDto]:
        p = self.session.exec(select(Patient).where(Patient.email == email)).first()
        return self._to_dto(p) if p else None

    def find_by_email_or_phone(self, email: str, phone: str) -> Optional[PatientDto]:
        p = self.session.exec(
            select(Patient).where(or_(Patient.email == email, Patient.phone == phone))
        ).first()
        return self._to_dto(p) if p else None
