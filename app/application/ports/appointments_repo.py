from dataclasses import dataclass
from typing import List, Optional, Protocol
from datetime import datetime, date, time, timedelta
from enum import IntEnum

CONSULTATION_LENGTH = timedelta(hours=1)


class AppointmentStatus(IntEnum):
    SCHEDULED = 0
    COMPLETED = 1
    PRESCRIBED = 2


class SlotAlreadyBookedError(Exception):
    """Raised by a store when (doctor, appointment time) is already taken."""


@dataclass
class AppointmentDto:
    id: Optional[int]
    doctor_id: int
    patient_id: int
    appointment_time: datetime
    status: int = AppointmentStatus.SCHEDULED
    patient_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def appointment_date(self) -> date:
        return self.appointment_time.date()

    @property
    def time_of_day(self) -> time:
        return self.appointment_time.time()

    @property
    def end_time(self) -> datetime:
        return self.appointment_time + CONSULTATION_LENGTH


class AppointmentsRepository(Protocol):
    def find_by_id(self, appointment_id: int) -> Optional[AppointmentDto]:
        ...

    def save(self, appointment: AppointmentDto) -> AppointmentDto:
        ...

    def delete(self, appointment: AppointmentDto) -> None:
        ...

    def find_by_doctor_and_time_range(self, doctor_id: int, start: datetime, end: datetime) -> List[AppointmentDto]:
        ...

    def find_by_doctor_and_time_range_and_patient_name_substring(self, doctor_id: int, patient_name: str, start: datetime, end: datetime) -> List[AppointmentDto]:
        ...

    def find_by_patient_id(self, patient_id: int) -> List[AppointmentDto]:
        ...

    def find_conflict(self, doctor_id: int, appointment_time: datetime) -> Optional[AppointmentDto]:
        ...

    def delete_by_doctor_id(self, doctor_id: int) -> int:
        ...
