from typing import List, Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.ports.auth_provider import Identity, ROLE_ADMIN
from ..application.ports.doctor_repo import DoctorDto
from ..application.services.availability_service import AvailabilityService
from ..application.services.directory_service import DoctorDirectoryService
from ..application.services.doctor_admin_service import DoctorAdminService
from ..exceptions import raise_for_failure
from ..schemas.doctors.doctor import AvailabilityResponse, DoctorCreate, DoctorResponse
from ..schemas.common.common import MessageResponse
from .dependencies import (
    get_availability_service,
    get_directory_service,
    get_doctor_admin_service,
    require_role,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def _to_response(d: DoctorDto) -> DoctorResponse:
    return DoctorResponse(
        id=d.id,
        name=d.name,
        specialty=d.specialty,
        email=d.email,
        phone=d.phone,
        available_times=d.available_times,
    )


def _to_dto(data: DoctorCreate) -> DoctorDto:
    return DoctorDto(
        id=None,
        name=data.name,
        specialty=data.specialty,
        email=data.email,
        phone=data.phone,
        available_times=data.available_times,
    )


@router.get("/", response_model=List[DoctorResponse])
def get_doctors(admin_service: DoctorAdminService = Depends(get_doctor_admin_service)):
    return [_to_response(d) for d in admin_service.list_doctors()]


@router.get("/filter", response_model=List[DoctorResponse])
def filter_doctors(
    name: Optional[str] = Query(None),
    specialty: Optional[str] = Query(None),
    time: Optional[str] = Query(None, description="AM or PM"),
    directory: DoctorDirectoryService = Depends(get_directory_service),
):
    return [_to_response(d) for d in directory.search(name=name, specialty=specialty, time_of_day=time)]


@router.get("/filter/{name}/{time}/{specialty}", response_model=List[DoctorResponse])
def filter_doctors_by_path(
    name: str,
    time: str,
    specialty: str,
    directory: DoctorDirectoryService = Depends(get_directory_service),
):
    # "null" path segments mean no filter
    return [_to_response(d) for d in directory.search(name=name, specialty=specialty, time_of_day=time)]


@router.get("/{doctor_id}", response_model=DoctorResponse)
def get_doctor(doctor_id: int, admin_service: DoctorAdminService = Depends(get_doctor_admin_service)):
    result = admin_service.get_doctor(doctor_id)
    raise_for_failure(result)
    return _to_response(result.data)


@router.get("/{doctor_id}/availability", response_model=AvailabilityResponse)
def get_doctor_availability(
    doctor_id: int,
    date: str = Query(..., description="YYYY-MM-DD"),
    availability: AvailabilityService = Depends(get_availability_service),
):
    slots = availability.compute_availability(doctor_id, date)
    return AvailabilityResponse(doctor_id=doctor_id, date=date, availability=slots, count=len(slots))


@router.post("/", response_model=DoctorResponse, status_code=201)
def create_doctor(
    doctor_data: DoctorCreate,
    admin: Identity = Depends(require_role(ROLE_ADMIN)),
    admin_service: DoctorAdminService = Depends(get_doctor_admin_service),
):
    result = admin_service.register_doctor(_to_dto(doctor_data))
    raise_for_failure(result)
    logger.info(f"Admin {admin.id} registered doctor {result.data.id}")
    return _to_response(result.data)


@router.put("/{doctor_id}", response_model=DoctorResponse)
def update_doctor(
    doctor_id: int,
    doctor_data: DoctorCreate,
    admin: Identity = Depends(require_role(ROLE_ADMIN)),
    admin_service: DoctorAdminService = Depends(get_doctor_admin_service),
):
    result = admin_service.update_doctor(doctor_id, _to_dto(doctor_data))
    raise_for_failure(result)
    return _to_response(result.data)


@router.delete("/{doctor_id}", response_model=MessageResponse)
def delete_doctor(
    doctor_id: int,
    admin: Identity = Depends(require_role(ROLE_ADMIN)),
    admin_service: DoctorAdminService = Depends(get_doctor_admin_service),
):
    result = admin_service.delete_doctor(doctor_id)
    raise_for_failure(result)
    return MessageResponse(message="Doctor deleted successfully")
