from dataclasses import dataclass, replace
from typing import List
import logging

from ..ports.appointments_repo import AppointmentsRepository
from ..ports.doctor_repo import DoctorDto, DoctorRepository
from ..results import FailureKind, ServiceResult
from ...utils import normalize_slots

logger = logging.getLogger(__name__)


@dataclass
class DoctorAdminService:
    doctor_repo: DoctorRepository
    appointments_repo: AppointmentsRepository

    def list_doctors(self) -> List[DoctorDto]:
        try:
            return self.doctor_repo.find_all()
        except Exception as e:
            logger.error(f"Error getting doctors: {e}")
            return []

    def get_doctor(self, doctor_id: int) -> ServiceResult[DoctorDto]:
        try:
            doctor = self.doctor_repo.find_by_id(doctor_id)
        except Exception as e:
            logger.error(f"Error getting doctor {doctor_id}: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to retrieve doctor")
        if not doctor:
            return ServiceResult.fail(FailureKind.NOT_FOUND, "Doctor not found")
        return ServiceResult.ok(doctor)

    def register_doctor(self, doctor: DoctorDto) -> ServiceResult[DoctorDto]:
        try:
            slots = normalize_slots(doctor.available_times)
        except ValueError as e:
            return ServiceResult.fail(FailureKind.VALIDATION_FAILED, str(e))
        try:
            if self.doctor_repo.find_by_email(doctor.email):
                return ServiceResult.fail(FailureKind.CONFLICT, "Doctor already exists")
            saved = self.doctor_repo.save(replace(doctor, id=None, available_times=slots))
        except Exception as e:
            logger.error(f"Error creating doctor: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to create doctor")
        logger.info(f"Registered doctor {saved.id} ({saved.specialty})")
        return ServiceResult.ok(saved)

    def update_doctor(self, doctor_id: int, doctor: DoctorDto) -> ServiceResult[DoctorDto]:
        try:
            slots = normalize_slots(doctor.available_times)
        except ValueError as e:
            return ServiceResult.fail(FailureKind.VALIDATION_FAILED, str(e))
        try:
            if not self.doctor_repo.exists_by_id(doctor_id):
                return ServiceResult.fail(FailureKind.NOT_FOUND, "Doctor not found")
            same_email = self.doctor_repo.find_by_email(doctor.email)
            if same_email and same_email.id != doctor_id:
                return ServiceResult.fail(FailureKind.CONFLICT, "Email is already used by another doctor")
            saved = self.doctor_repo.save(replace(doctor, id=doctor_id, available_times=slots))
        except Exception as e:
            logger.error(f"Error updating doctor {doctor_id}: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to update doctor")
        logger.info(f"Updated doctor {doctor_id}")
        return ServiceResult.ok(saved)

    def delete_doctor(self, doctor_id: int) -> ServiceResult[None]:
        """Delete a doctor together with all of the doctor's appointments."""
        try:
            if not self.doctor_repo.exists_by_id(doctor_id):
                return ServiceResult.fail(FailureKind.NOT_FOUND, "Doctor not found")
            removed = self.appointments_repo.delete_by_doctor_id(doctor_id)
            self.doctor_repo.delete_by_id(doctor_id)
        except Exception as e:
            logger.error(f"Error deleting doctor {doctor_id}: {e}")
            return ServiceResult.fail(FailureKind.STORE_FAULT, "Failed to delete doctor")
        logger.info(f"Deleted doctor {doctor_id} and {removed} appointments")
        return ServiceResult.ok()
