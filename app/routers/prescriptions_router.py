from fastapi import APIRouter, Depends

from ..application.ports.auth_provider import Identity, ROLE_DOCTOR
from ..application.ports.prescription_repo import PrescriptionDto
from ..application.services.prescription_service import PrescriptionService
from ..exceptions import raise_for_failure
from ..schemas.prescriptions.prescription import PrescriptionCreate, PrescriptionResponse
from .dependencies import get_prescription_service, require_role

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])


def _to_response(p: PrescriptionDto) -> PrescriptionResponse:
    return PrescriptionResponse(
        id=p.id,
        appointment_id=p.appointment_id,
        patient_name=p.patient_name,
        medication=p.medication,
        dosage=p.dosage,
        doctor_notes=p.doctor_notes,
        created_at=p.created_at,
    )


@router.post("/", response_model=PrescriptionResponse, status_code=201)
def save_prescription(
    data: PrescriptionCreate,
    doctor: Identity = Depends(require_role(ROLE_DOCTOR)),
    service: PrescriptionService = Depends(get_prescription_service),
):
    result = service.add_prescription(doctor.id, PrescriptionDto(id=None, **data.model_dump()))
    raise_for_failure(result)
    return _to_response(result.data)


@router.get("/{appointment_id}", response_model=PrescriptionResponse)
def get_prescription(
    appointment_id: int,
    doctor: Identity = Depends(require_role(ROLE_DOCTOR)),
    service: PrescriptionService = Depends(get_prescription_service),
):
    result = service.get_prescription(doctor.id, appointment_id)
    raise_for_failure(result)
    return _to_response(result.data)
