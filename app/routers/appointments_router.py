from typing import List, Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.ports.appointments_repo import AppointmentDto, AppointmentStatus
from ..application.ports.auth_provider import Identity, ROLE_DOCTOR
from ..application.services.booking_service import BookingService
from ..application.services.lifecycle_service import AppointmentLifecycleService
from ..application.services.schedule_service import ScheduleService
from ..exceptions import raise_for_failure
from ..schemas.appointments.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)
from ..schemas.common.common import MessageResponse
from ..utils import format_slot
from .dependencies import (
    get_booking_service,
    get_current_patient,
    get_lifecycle_service,
    get_schedule_service,
    require_role,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def to_response(a: AppointmentDto) -> AppointmentResponse:
    try:
        label = AppointmentStatus(a.status).name.lower()
    except ValueError:
        label = "unknown"
    return AppointmentResponse(
        id=a.id,
        doctor_id=a.doctor_id,
        patient_id=a.patient_id,
        patient_name=a.patient_name,
        appointment_time=a.appointment_time,
        appointment_date=a.appointment_date,
        start_time=format_slot(a.time_of_day),
        end_time=a.end_time,
        status=int(a.status),
        status_label=label,
    )


@router.post("/", response_model=AppointmentResponse, status_code=201)
def book_appointment(
    appointment_data: AppointmentCreate,
    patient: Identity = Depends(get_current_patient),
    booking: BookingService = Depends(get_booking_service),
):
    result = booking.book(appointment_data.doctor_id, patient.id, appointment_data.appointment_time)
    raise_for_failure(result)
    return to_response(result.data)


@router.get("/", response_model=List[AppointmentResponse])
def get_patient_appointments(
    patient: Identity = Depends(get_current_patient),
    schedule: ScheduleService = Depends(get_schedule_service),
):
    return [to_response(a) for a in schedule.appointments_for_patient(patient.id)]


@router.get("/doctor", response_model=List[AppointmentResponse])
def get_doctor_appointments(
    date: str = Query(..., description="YYYY-MM-DD"),
    patient_name: Optional[str] = Query(None),
    doctor: Identity = Depends(require_role(ROLE_DOCTOR)),
    schedule: ScheduleService = Depends(get_schedule_service),
):
    appts = schedule.appointments_for_doctor_day(doctor.id, date, patient_name)
    logger.info(f"Retrieved {len(appts)} appointments for doctor {doctor.id} on {date}")
    return [to_response(a) for a in appts]


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    appointment_data: AppointmentUpdate,
    patient: Identity = Depends(get_current_patient),
    lifecycle: AppointmentLifecycleService = Depends(get_lifecycle_service),
):
    result = lifecycle.update(
        appointment_id,
        appointment_data.doctor_id,
        patient.id,
        appointment_data.appointment_time,
        appointment_data.status,
    )
    raise_for_failure(result)
    return to_response(result.data)


@router.delete("/{appointment_id}", response_model=MessageResponse)
def cancel_appointment(
    appointment_id: int,
    patient: Identity = Depends(get_current_patient),
    lifecycle: AppointmentLifecycleService = Depends(get_lifecycle_service),
):
    result = lifecycle.cancel(appointment_id, patient.id)
    raise_for_failure(result)
    return MessageResponse(message="Appointment canceled successfully")


@router.put("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: int,
    status_data: AppointmentStatusUpdate,
    doctor: Identity = Depends(require_role(ROLE_DOCTOR)),
    lifecycle: AppointmentLifecycleService = Depends(get_lifecycle_service),
):
    result = lifecycle.change_status(appointment_id, status_data.status, actor_id=doctor.id, doctor_id=doctor.id)
    raise_for_failure(result)
    return to_response(result.data)
