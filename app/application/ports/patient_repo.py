from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class PatientDto:
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


class PatientRepository(Protocol):
    def find_by_id(self, patient_id: int) -> Optional[PatientDto]:
        ...

    def find_by_email(self, email: str) -> Optional[PatientDto]:
        ...

    def find_by_email_or_phone(self, email: str, phone: str) -> Optional[PatientDto]:
        ...
