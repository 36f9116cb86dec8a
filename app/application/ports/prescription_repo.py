from dataclasses import dataclass
from typing import Optional, Protocol
from datetime import datetime


@dataclass
class PrescriptionDto:
    id: Optional[int]
    appointment_id: int
    patient_name: str
    medication: str
    dosage: str
    doctor_notes: Optional[str] = None
    created_at: Optional[datetime] = None


class PrescriptionRepository(Protocol):
    def find_by_appointment_id(self, appointment_id: int) -> Optional[PrescriptionDto]:
        ...

    def save(self, prescription: PrescriptionDto) -> PrescriptionDto:
        ...

    def delete_by_appointment_id(self, appointment_id: int) -> None:
        ...
