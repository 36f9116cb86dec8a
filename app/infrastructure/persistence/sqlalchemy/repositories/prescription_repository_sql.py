from typing import Optional
from sqlmodel import Session, select

from .....db.models import Prescription
from .....application.ports.prescription_repo import PrescriptionRepository, PrescriptionDto


class SqlPrescriptionRepository(PrescriptionRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, p: Prescription) -> PrescriptionDto:
        return PrescriptionDto(
            id=p.id,
            appointment_id=p.appointment_id,
            patient_name=p.patient_name,
            medication=p.medication,
            dosage=p.dosage,
            doctor_notes=p.doctor_notes,
            created_at=p.created_at,
        )

    def find_by_appointment_id(self, appointment_id: int) -> Optional[PrescriptionDto]:
        p = self.session.exec(
            select(Prescription).where(Prescription.appointment_id == appointment_id)
        ).first()
        return self._to_dto(p) if p else None

    def save(self, prescription: PrescriptionDto) -> PrescriptionDto:
        p = Prescription(
            appointment_id=prescription.appointment_id,
            patient_name=prescription.patient_name,
            medication=prescription.medication,
            dosage=prescription.dosage,
            doctor_notes=prescription.doctor_notes,
        )
        self.session.add(p)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(p)
        return self._to_dto(p)

    def delete_by_appointment_id(self, appointment_id: int) -> None:
        p = self.session.exec(
            select(Prescription).where(Prescription.appointment_id == appointment_id)
        ).first()
        if not p:
            return
        self.session.delete(p)
        self.session.commit()
