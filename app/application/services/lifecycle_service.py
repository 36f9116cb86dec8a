from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, FrozenSet, Optional, Union
import logging

from ..ports.appointments_repo import (
    AppointmentDto,
    AppointmentStatus,
    AppointmentsRepository,
    SlotAlreadyBookedError,
)
from ..ports.audit_logger import AuditLogger
from ..ports.doctor_repo import DoctorRepository
from ..results import FailureKind, ServiceResult
from ...utils import parse_appointment_time

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset({
        AppointmentStatus.SCHEDULED,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.PRESCRIBED,
    }),
    AppointmentStatus.COMPLETED: frozenset({AppointmentStatus.COMPLETED}),
    AppointmentStatus.PRESCRIBED: frozenset({AppointmentStatus.PRESCRIBED}),
}


def to_status(value: int) -> Optional[AppointmentStatus]:
    try:
        return AppointmentStatus(int(value))
    except (TypeError, ValueError):
        return None


@dataclass
class AppointmentLifecycleService:
    """Update, cancellation and status changes of existing appointments."""

    repo: AppointmentsRepository
    doctor_repo: DoctorRepository
    audit: Optional[AuditLogger] = None
    strict_transitions: bool = False

    def update(self, appointment_id: int, doctor_id: int, patient_id: int, appointment_time: Union[datetime, str], status: int) -> ServiceResult[AppointmentDto]:
        try:
            existing = self.repo.find_by_id(appointment_id)
            if not existing:
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.NOT_FOUND, "Appointment not found")
            if existing.patient_id != patient_id:
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.UNAUTHORIZED, "Unauthorized: patient does not own this appointment")
            if existing.status != AppointmentStatus.SCHEDULED:
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.INVALID_STATE, "Appointment can only be updated while scheduled")
            if not self.doctor_repo.exists_by_id(doctor_id):
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.DOCTOR_NOT_FOUND, "Doctor not found")

            new_status = to_status(status)
            if new_status is None:
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.VALIDATION_FAILED, f"Invalid status. Must be one of: {[s.value for s in AppointmentStatus]}")
            try:
                when = parse_appointment_time(appointment_time)
            except (TypeError, ValueError):
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.VALIDATION_FAILED, "Invalid appointment time format. Use YYYY-MM-DDTHH:MM")

            clash = self.repo.find_conflict(doctor_id, when)
            if clash and clash.id != appointment_id:
                return self._reject("appointment.update", patient_id, appointment_id, FailureKind.SLOT_UNAVAILABLE, "This time slot is already booked")

            updated = self.repo.save(replace(existing, doctor_id=doctor_id, appointment_time=when, status=new_status))
        except SlotAlreadyBookedError:
            return self._reject("appointment.update", patient_id, appointment_id, FailureKind.SLOT_UNAVAILABLE, "This time slot is already booked")
        except Exception as e:
            logger.error(f"Error updating appointment {appointment_id}: {e}")
            return self._reject("appointment.update", patient_id, appointment_id, FailureKind.STORE_FAULT, "Failed to update appointment")

        logger.info(f"Updated appointment {appointment_id} by patient {patient_id}")
        self._audit("appointment.update", patient_id, appointment_id, True, {"doctor_id": doctor_id, "appointment_time": when.isoformat(), "status": int(new_status)})
        return ServiceResult.ok(updated)

    def cancel(self, appointment_id: int, patient_id: int) -> ServiceResult[None]:
        """Cancellation deletes the appointment; it cannot be undone."""
        try:
            existing = self.repo.find_by_id(appointment_id)
            if not existing:
                return self._reject("appointment.cancel", patient_id, appointment_id, FailureKind.NOT_FOUND, "Appointment not found")
            if existing.patient_id != patient_id:
                return self._reject("appointment.cancel", patient_id, appointment_id, FailureKind.UNAUTHORIZED, "Unauthorized: patient does not own this appointment")
            self.repo.delete(existing)
        except Exception as e:
            logger.error(f"Error cancelling appointment {appointment_id}: {e}")
            return self._reject("appointment.cancel", patient_id, appointment_id, FailureKind.STORE_FAULT, "Failed to cancel appointment")

        logger.info(f"Cancelled appointment {appointment_id} by patient {patient_id}")
        self._audit("appointment.cancel", patient_id, appointment_id, True)
        return ServiceResult.ok()

    def check_status_change(self, appointment_id: int, status: int, doctor_id: Optional[int] = None) -> ServiceResult[AppointmentDto]:
        """Validate a status change without writing it.

        ``doctor_id`` restricts the change to that doctor's own appointments.
        """
        try:
            existing = self.repo.find_by_id(appointment_id)
        except Exception as e:
            logger.error(f"Error loading appointment {appointment_id}: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to update appointment status")
        if not existing:
            return ServiceResult.fail(FailureKind.NOT_FOUND, "Appointment not found")
        if doctor_id is not None and existing.doctor_id != doctor_id:
            return ServiceResult.fail(FailureKind.UNAUTHORIZED, "Unauthorized: appointment belongs to another doctor")
        new_status = to_status(status)
        if new_status is None:
            return ServiceResult.fail(FailureKind.VALIDATION_FAILED, f"Invalid status. Must be one of: {[s.value for s in AppointmentStatus]}")
        if self.strict_transitions:
            current = to_status(existing.status)
            if current is None or new_status not in ALLOWED_TRANSITIONS[current]:
                return ServiceResult.fail(FailureKind.INVALID_STATE, f"Cannot move appointment from status {existing.status} to {int(new_status)}")
        return ServiceResult.ok(existing)

    def change_status(self, appointment_id: int, status: int, actor_id: Optional[int] = None, doctor_id: Optional[int] = None) -> ServiceResult[AppointmentDto]:
        checked = self.check_status_change(appointment_id, status, doctor_id)
        if not checked.success:
            return self._reject("appointment.status", actor_id, appointment_id, checked.kind, checked.error)

        new_status = to_status(status)
        try:
            updated = self.repo.save(replace(checked.data, status=new_status))
        except Exception as e:
            logger.error(f"Error updating appointment {appointment_id} status: {e}")
            return self._reject("appointment.status", actor_id, appointment_id, FailureKind.STORE_FAULT, "Failed to update appointment status")

        logger.info(f"Updated appointment {appointment_id} status to {int(new_status)}")
        self._audit("appointment.status", actor_id, appointment_id, True, {"status": int(new_status)})
        return ServiceResult.ok(updated)

    def _reject(self, action: str, actor_id: Optional[int], appointment_id: int, kind: FailureKind, message: str) -> ServiceResult:
        logger.warning(f"{action} rejected for appointment {appointment_id}: {message}")
        self._audit(action, actor_id, appointment_id, False, {"reason": kind.value})
        return ServiceResult.fail(kind, message)

    def _audit(self, action: str, actor_id: Optional[int], appointment_id: int, success: bool, details: Optional[dict] = None) -> None:
        if self.audit:
            self.audit.log(action, actor_id=actor_id, appointment_id=appointment_id, success=success, details=details)
