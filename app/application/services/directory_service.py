from dataclasses import dataclass
from typing import List, Optional
import logging

from ..ports.doctor_repo import DoctorDto, DoctorRepository
from ...utils import NOON, normalize_filter, parse_slot

logger = logging.getLogger(__name__)

TIME_OF_DAY_AM = "AM"
TIME_OF_DAY_PM = "PM"


def has_slot_in(doctor: DoctorDto, time_of_day: str) -> bool:
    """True when a slot falls strictly before (AM) or strictly after (PM) noon."""
    for slot in doctor.available_times or []:
        t = parse_slot(slot)
        if time_of_day == TIME_OF_DAY_AM and t < NOON:
            return True
        if time_of_day == TIME_OF_DAY_PM and t > NOON:
            return True
    return False


@dataclass
class DoctorDirectoryService:
    doctor_repo: DoctorRepository

    def search(self, name: Optional[str] = None, specialty: Optional[str] = None, time_of_day: Optional[str] = None) -> List[DoctorDto]:
        name = normalize_filter(name)
        specialty = normalize_filter(specialty)
        time_of_day = normalize_filter(time_of_day)
        try:
            if name is None and specialty is None:
                doctors = self.doctor_repo.find_all()
            elif specialty is None:
                doctors = self.doctor_repo.find_by_name_substring(name)
            elif name is None:
                doctors = self.doctor_repo.find_by_specialty(specialty)
            else:
                doctors = self.doctor_repo.find_by_name_and_specialty(name, specialty)

            if time_of_day is not None:
                bucket = time_of_day.upper()
                if bucket not in (TIME_OF_DAY_AM, TIME_OF_DAY_PM):
                    raise ValueError(f"Invalid time of day: {time_of_day!r}. Use AM or PM")
                doctors = [d for d in doctors if has_slot_in(d, bucket)]

            return _unique(doctors)
        except Exception as e:
            logger.error(f"Error searching doctors (name={name}, specialty={specialty}, time={time_of_day}): {e}")
            return []


def _unique(doctors: List[DoctorDto]) -> List[DoctorDto]:
    seen = set()
    out = []
    for d in doctors:
        if d.id in seen:
            continue
        seen.add(d.id)
        out.append(d)
    return out
