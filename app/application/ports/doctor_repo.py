from dataclasses import dataclass, field
from typing import List, Optional, Protocol


@dataclass
class DoctorDto:
    id: Optional[int]
    name: str
    specialty: str
    email: str
    phone: Optional[str] = None
    available_times: List[str] = field(default_factory=list)


class DoctorRepository(Protocol):
    def find_by_id(self, doctor_id: int) -> Optional[DoctorDto]:
        ...

    def find_by_email(self, email: str) -> Optional[DoctorDto]:
        ...

    def find_all(self) -> List[DoctorDto]:
        ...

    def exists_by_id(self, doctor_id: int) -> bool:
        ...

    def save(self, doctor: DoctorDto) -> DoctorDto:
        ...

    def delete_by_id(self, doctor_id: int) -> None:
        ...

    def find_by_name_substring(self, name: str) -> List[DoctorDto]:
        ...

    def find_by_specialty(self, specialty: str) -> List[DoctorDto]:
        ...

    def find_by_name_and_specialty(self, name: str, specialty: str) -> List[DoctorDto]:
        ...
