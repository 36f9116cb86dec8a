from datetime import datetime

import pytest

from app.application.ports.appointments_repo import AppointmentStatus
from app.application.ports.prescription_repo import PrescriptionDto
from app.application.results import FailureKind
from app.application.services.lifecycle_service import AppointmentLifecycleService
from app.application.services.prescription_service import PrescriptionService


def _rx(appointment_id):
    return PrescriptionDto(
        id=None,
        appointment_id=appointment_id,
        patient_name="Pat",
        medication="Amoxicillin",
        dosage="500mg twice daily",
        doctor_notes="Take with food",
    )


@pytest.fixture
def setup(doctors, appts, prescriptions, audit):
    d = doctors.add("Dr. Rx", slots=["10:00"])
    appt = appts.add(d.id, 1, datetime(2024, 6, 1, 10, 0))
    lifecycle = AppointmentLifecycleService(appts, doctors, audit)
    svc = PrescriptionService(prescriptions, appts, lifecycle, audit)
    return svc, d, appt


def test_prescribing_marks_appointment_prescribed(setup, appts, prescriptions):
    svc, d, appt = setup
    res = svc.add_prescription(d.id, _rx(appt.id))
    assert res.success
    assert res.data.id is not None
    assert prescriptions.find_by_appointment_id(appt.id).medication == "Amoxicillin"
    assert appts.find_by_id(appt.id).status == AppointmentStatus.PRESCRIBED


def test_one_prescription_per_appointment(setup):
    svc, d, appt = setup
    assert svc.add_prescription(d.id, _rx(appt.id)).success
    assert svc.add_prescription(d.id, _rx(appt.id)).kind == FailureKind.CONFLICT


def test_other_doctor_cannot_prescribe(setup, appts):
    svc, d, appt = setup
    res = svc.add_prescription(d.id + 1, _rx(appt.id))
    assert res.kind == FailureKind.UNAUTHORIZED
    assert appts.find_by_id(appt.id).status == AppointmentStatus.SCHEDULED


def test_unknown_appointment(setup):
    svc, d, _ = setup
    assert svc.add_prescription(d.id, _rx(999)).kind == FailureKind.NOT_FOUND


def test_get_prescription(setup):
    svc, d, appt = setup
    assert svc.get_prescription(d.id, appt.id).kind == FailureKind.NOT_FOUND
    svc.add_prescription(d.id, _rx(appt.id))
    res = svc.get_prescription(d.id, appt.id)
    assert res.success
    assert res.data.dosage == "500mg twice daily"
    assert svc.get_prescription(d.id + 1, appt.id).kind == FailureKind.UNAUTHORIZED


def test_refused_status_change_stores_nothing(doctors, appts, prescriptions, audit):
    d = doctors.add("Dr. Strict", slots=["10:00"])
    appt = appts.add(d.id, 1, datetime(2024, 6, 1, 10, 0), status=AppointmentStatus.COMPLETED)
    lifecycle = AppointmentLifecycleService(appts, doctors, audit, strict_transitions=True)
    svc = PrescriptionService(prescriptions, appts, lifecycle, audit)

    res = svc.add_prescription(d.id, _rx(appt.id))
    assert res.kind == FailureKind.INVALID_STATE
    assert prescriptions.find_by_appointment_id(appt.id) is None
    assert appts.find_by_id(appt.id).status == AppointmentStatus.COMPLETED

    # nothing left behind, so a retry is judged on its own merits
    assert svc.add_prescription(d.id, _rx(appt.id)).kind == FailureKind.INVALID_STATE


def test_failed_status_write_removes_the_prescription(setup, appts, prescriptions):
    svc, d, appt = setup

    def broken_save(appointment):
        raise RuntimeError("write failed")

    appts.save = broken_save
    res = svc.add_prescription(d.id, _rx(appt.id))
    assert res.kind == FailureKind.STORE_FAULT
    assert prescriptions.find_by_appointment_id(appt.id) is None
