from typing import Optional
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session
import logging

from ..core.config import settings
from ..db.session import get_session
from ..application.ports.auth_provider import AuthProvider, Identity, ROLE_PATIENT
from ..application.services.availability_service import AvailabilityService
from ..application.services.booking_service import BookingService
from ..application.services.directory_service import DoctorDirectoryService
from ..application.services.doctor_admin_service import DoctorAdminService
from ..application.services.lifecycle_service import AppointmentLifecycleService
from ..application.services.prescription_service import PrescriptionService
from ..application.services.schedule_service import ScheduleService
from ..infrastructure.audit.std_logger import StdAuditLogger
from ..infrastructure.auth.jwt_provider import JwtAuthProvider
from ..infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.doctor_repository_sql import SqlDoctorRepository
from ..infrastructure.persistence.sqlalchemy.repositories.patient_repository_sql import SqlPatientRepository
from ..infrastructure.persistence.sqlalchemy.repositories.prescription_repository_sql import SqlPrescriptionRepository

logger = logging.getLogger(__name__)

oauth2_scheme = HTTPBearer(auto_error=False)


def get_auth_provider() -> AuthProvider:
    return JwtAuthProvider(settings.SECRET_KEY, settings.ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def require_role(role: str):
    """Dependency factory: the bearer token must be valid for ``role``."""

    def get_identity(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme),
        auth: AuthProvider = Depends(get_auth_provider),
    ) -> Identity:
        if not credentials or not credentials.credentials:
            raise HTTPException(status_code=401, detail="Authentication required")
        token = credentials.credentials
        if not auth.validate(token, role):
            logger.warning(f"Rejected token for role {role}")
            raise HTTPException(status_code=401, detail=f"Invalid or expired token for role: {role}")
        identity = auth.resolve_identity(token)
        if identity is None:
            raise HTTPException(status_code=401, detail="Invalid token: missing user ID")
        return identity

    return get_identity


# Repositories

def get_doctor_repo(session: Session = Depends(get_session)) -> SqlDoctorRepository:
    return SqlDoctorRepository(session)


def get_patient_repo(session: Session = Depends(get_session)) -> SqlPatientRepository:
    return SqlPatientRepository(session)


def get_appointments_repo(session: Session = Depends(get_session)) -> SqlAppointmentsRepository:
    return SqlAppointmentsRepository(session)


def get_prescription_repo(session: Session = Depends(get_session)) -> SqlPrescriptionRepository:
    return SqlPrescriptionRepository(session)


def get_current_patient(
    identity: Identity = Depends(require_role(ROLE_PATIENT)),
    patients: SqlPatientRepository = Depends(get_patient_repo),
) -> Identity:
    if not patients.find_by_id(identity.id):
        raise HTTPException(status_code=401, detail="Patient not found")
    return identity


# Services

def get_availability_service(
    doctors: SqlDoctorRepository = Depends(get_doctor_repo),
    appointments: SqlAppointmentsRepository = Depends(get_appointments_repo),
) -> AvailabilityService:
    return AvailabilityService(doctor_repo=doctors, appointments_repo=appointments)


def get_directory_service(doctors: SqlDoctorRepository = Depends(get_doctor_repo)) -> DoctorDirectoryService:
    return DoctorDirectoryService(doctor_repo=doctors)


def get_doctor_admin_service(
    doctors: SqlDoctorRepository = Depends(get_doctor_repo),
    appointments: SqlAppointmentsRepository = Depends(get_appointments_repo),
) -> DoctorAdminService:
    return DoctorAdminService(doctor_repo=doctors, appointments_repo=appointments)


def get_booking_service(
    doctors: SqlDoctorRepository = Depends(get_doctor_repo),
    appointments: SqlAppointmentsRepository = Depends(get_appointments_repo),
) -> BookingService:
    return BookingService(
        repo=appointments,
        doctor_repo=doctors,
        audit=StdAuditLogger(),
        enforce_configured_slots=settings.ENFORCE_CONFIGURED_SLOTS,
    )


def get_lifecycle_service(
    doctors: SqlDoctorRepository = Depends(get_doctor_repo),
    appointments: SqlAppointmentsRepository = Depends(get_appointments_repo),
) -> AppointmentLifecycleService:
    return AppointmentLifecycleService(
        repo=appointments,
        doctor_repo=doctors,
        audit=StdAuditLogger(),
        strict_transitions=settings.STRICT_STATUS_TRANSITIONS,
    )


def get_schedule_service(appointments: SqlAppointmentsRepository = Depends(get_appointments_repo)) -> ScheduleService:
    return ScheduleService(repo=appointments)


def get_prescription_service(
    prescriptions: SqlPrescriptionRepository = Depends(get_prescription_repo),
    appointments: SqlAppointmentsRepository = Depends(get_appointments_repo),
    lifecycle: AppointmentLifecycleService = Depends(get_lifecycle_service),
) -> PrescriptionService:
    return PrescriptionService(
        repo=prescriptions,
        appointments_repo=appointments,
        lifecycle=lifecycle,
        audit=StdAuditLogger(),
    )
