from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
import logging

from ..ports.appointments_repo import (
    AppointmentDto,
    AppointmentStatus,
    AppointmentsRepository,
    SlotAlreadyBookedError,
)
from ..ports.audit_logger import AuditLogger
from ..ports.doctor_repo import DoctorDto, DoctorRepository
from ..results import FailureKind, ServiceResult
from ...utils import parse_appointment_time, parse_slot

logger = logging.getLogger(__name__)

BOOKING_FAILED = "Failed to book appointment"


def is_configured_slot(doctor: DoctorDto, when: datetime) -> bool:
    configured = {parse_slot(s) for s in doctor.available_times or []}
    return when.time() in configured


@dataclass
class BookingService:
    repo: AppointmentsRepository
    doctor_repo: DoctorRepository
    audit: Optional[AuditLogger] = None
    enforce_configured_slots: bool = False

    def book(self, doctor_id: int, patient_id: int, appointment_time: Union[datetime, str]) -> ServiceResult[AppointmentDto]:
        """Commit a new Scheduled appointment for an authenticated patient.

        The caller has already bound ``patient_id`` to the token identity.
        A second booking of the same doctor and start time is refused here and,
        under concurrency, by the store's unique constraint.
        """
        try:
            when = parse_appointment_time(appointment_time)
        except (TypeError, ValueError):
            return self._reject(patient_id, FailureKind.VALIDATION_FAILED, "Invalid appointment time format. Use YYYY-MM-DDTHH:MM")

        try:
            doctor = self.doctor_repo.find_by_id(doctor_id)
            if not doctor:
                return self._reject(patient_id, FailureKind.DOCTOR_NOT_FOUND, "Doctor not found")

            if self.enforce_configured_slots and not is_configured_slot(doctor, when):
                return self._reject(patient_id, FailureKind.VALIDATION_FAILED, "Requested time is not one of the doctor's slots")

            if self.repo.find_conflict(doctor_id, when):
                return self._reject(patient_id, FailureKind.SLOT_UNAVAILABLE, "This time slot is already booked")

            appt = self.repo.save(AppointmentDto(
                id=None,
                doctor_id=doctor_id,
                patient_id=patient_id,
                appointment_time=when,
                status=AppointmentStatus.SCHEDULED,
            ))
        except SlotAlreadyBookedError:
            return self._reject(patient_id, FailureKind.SLOT_UNAVAILABLE, "This time slot is already booked")
        except Exception as e:
            logger.error(f"Error booking appointment for doctor {doctor_id}: {e}")
            return self._reject(patient_id, FailureKind.STORE_FAULT, BOOKING_FAILED)

        logger.info(f"Booked appointment {appt.id} with doctor {doctor_id} for patient {patient_id}")
        if self.audit:
            self.audit.log("appointment.book", actor_id=patient_id, appointment_id=appt.id, details={"doctor_id": doctor_id, "appointment_time": when.isoformat()})
        return ServiceResult.ok(appt)

    def _reject(self, patient_id: int, kind: FailureKind, message: str) -> ServiceResult[AppointmentDto]:
        logger.warning(f"Booking rejected for patient {patient_id}: {message}")
        if self.audit:
            self.audit.log("appointment.book", actor_id=patient_id, success=False, details={"reason": kind.value})
        return ServiceResult.fail(kind, message)
