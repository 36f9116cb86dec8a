from dataclasses import dataclass, replace
from typing import Optional
import logging

from ..ports.appointments_repo import AppointmentStatus, AppointmentsRepository
from ..ports.audit_logger import AuditLogger
from ..ports.prescription_repo import PrescriptionDto, PrescriptionRepository
from ..results import FailureKind, ServiceResult
from .lifecycle_service import AppointmentLifecycleService

logger = logging.getLogger(__name__)


@dataclass
class PrescriptionService:
    repo: PrescriptionRepository
    appointments_repo: AppointmentsRepository
    lifecycle: AppointmentLifecycleService
    audit: Optional[AuditLogger] = None

    def add_prescription(self, doctor_id: int, prescription: PrescriptionDto) -> ServiceResult[PrescriptionDto]:
        """Record the prescription and mark the appointment Prescribed.

        Neither write is kept without the other.
        """
        appointment_id = prescription.appointment_id
        try:
            appt = self.appointments_repo.find_by_id(appointment_id)
            if not appt:
                return ServiceResult.fail(FailureKind.NOT_FOUND, "Appointment not found")
            if appt.doctor_id != doctor_id:
                return ServiceResult.fail(FailureKind.UNAUTHORIZED, "Unauthorized: appointment belongs to another doctor")
            if self.repo.find_by_appointment_id(appointment_id):
                return ServiceResult.fail(FailureKind.CONFLICT, "A prescription already exists for this appointment.")
            allowed = self.lifecycle.check_status_change(appointment_id, AppointmentStatus.PRESCRIBED)
            if not allowed.success:
                return ServiceResult.fail(allowed.kind, allowed.error)
            saved = self.repo.save(replace(prescription, id=None))
        except Exception as e:
            logger.error(f"Error saving prescription for appointment {appointment_id}: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to save prescription")

        status = self.lifecycle.change_status(appointment_id, AppointmentStatus.PRESCRIBED, actor_id=doctor_id)
        if not status.success:
            try:
                self.repo.delete_by_appointment_id(appointment_id)
            except Exception as e:
                logger.error(f"Error removing prescription for appointment {appointment_id} after failed status change: {e}")
                return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to save prescription")
            return ServiceResult.fail(status.kind, status.error)

        logger.info(f"Saved prescription {saved.id} for appointment {appointment_id}")
        if self.audit:
            self.audit.log("prescription.add", actor_id=doctor_id, appointment_id=appointment_id)
        return ServiceResult.ok(saved)

    def get_prescription(self, doctor_id: int, appointment_id: int) -> ServiceResult[PrescriptionDto]:
        try:
            appt = self.appointments_repo.find_by_id(appointment_id)
            if not appt:
                return ServiceResult.fail(FailureKind.NOT_FOUND, "Appointment not found")
            if appt.doctor_id != doctor_id:
                return ServiceResult.fail(FailureKind.UNAUTHORIZED, "Unauthorized: appointment belongs to another doctor")
            found = self.repo.find_by_appointment_id(appointment_id)
        except Exception as e:
            logger.error(f"Error fetching prescription for appointment {appointment_id}: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to fetch prescription")
        if not found:
            return ServiceResult.fail(FailureKind.NOT_FOUND, "No prescription found for this appointment.")
        return ServiceResult.ok(found)
