from dataclasses import dataclass
from datetime import date
from typing import List, Union
import logging

from ..ports.doctor_repo import DoctorRepository
from ..ports.appointments_repo import AppointmentsRepository
from ...utils import day_window, format_slot, parse_day, parse_slot

logger = logging.getLogger(__name__)


@dataclass
class AvailabilityService:
    """Free slots of a doctor on a given day.

    Configured slots are recurring times of day; a slot is free on a date when
    no appointment of that doctor starts at that time within the day. Read
    path: any fault is logged and reported as no availability.
    """

    doctor_repo: DoctorRepository
    appointments_repo: AppointmentsRepository

    def compute_availability(self, doctor_id: int, day: Union[date, str]) -> List[str]:
        try:
            doctor = self.doctor_repo.find_by_id(doctor_id)
            if not doctor:
                return []
            if not doctor.available_times:
                return []

            configured = {parse_slot(s) for s in doctor.available_times}
            start, end = day_window(parse_day(day))
            booked = {
                a.time_of_day
                for a in self.appointments_repo.find_by_doctor_and_time_range(doctor_id, start, end)
            }
            return [format_slot(t) for t in sorted(configured - booked)]
        except Exception as e:
            logger.error(f"Error computing availability for doctor {doctor_id} on {day}: {e}")
            return []
