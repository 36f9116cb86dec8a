from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union
import logging

from ..ports.appointments_repo import AppointmentDto, AppointmentsRepository
from ...utils import day_window, normalize_filter, parse_day

logger = logging.getLogger(__name__)


@dataclass
class ScheduleService:
    repo: AppointmentsRepository

    def appointments_for_doctor_day(self, doctor_id: int, day: Union[date, str], patient_name: Optional[str] = None) -> List[AppointmentDto]:
        patient_name = normalize_filter(patient_name)
        try:
            start, end = day_window(parse_day(day))
            if patient_name:
                appts = self.repo.find_by_doctor_and_time_range_and_patient_name_substring(doctor_id, patient_name, start, end)
            else:
                appts = self.repo.find_by_doctor_and_time_range(doctor_id, start, end)
            return sorted(appts, key=lambda a: a.appointment_time)
        except Exception as e:
            logger.error(f"Error getting appointments for doctor {doctor_id} on {day}: {e}")
            return []

    def appointments_for_patient(self, patient_id: int) -> List[AppointmentDto]:
        try:
            return sorted(self.repo.find_by_patient_id(patient_id), key=lambda a: a.appointment_time)
        except Exception as e:
            logger.error(f"Error getting appointments for patient {patient_id}: {e}")
            return []
