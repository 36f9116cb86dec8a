from datetime import datetime

from app.application.ports.doctor_repo import DoctorDto
from app.application.results import FailureKind
from app.application.services.doctor_admin_service import DoctorAdminService


def _doctor(email="new@clinic.test", slots=None):
    return DoctorDto(id=None, name="Dr. New", specialty="Neurology", email=email, available_times=slots or ["14:00", "09:00"])


def test_register_sorts_slots(doctors, appts):
    svc = DoctorAdminService(doctors, appts)
    res = svc.register_doctor(_doctor())
    assert res.success
    assert res.data.available_times == ["09:00", "14:00"]
    assert doctors.find_by_id(res.data.id) is not None


def test_register_rejects_duplicate_slots_and_bad_times(doctors, appts):
    svc = DoctorAdminService(doctors, appts)
    assert svc.register_doctor(_doctor(slots=["09:00", "09:00:00"])).kind == FailureKind.VALIDATION_FAILED
    assert svc.register_doctor(_doctor(slots=["25:00"])).kind == FailureKind.VALIDATION_FAILED
    assert doctors.doctors == {}


def test_register_same_email_twice(doctors, appts):
    svc = DoctorAdminService(doctors, appts)
    assert svc.register_doctor(_doctor()).success
    assert svc.register_doctor(_doctor()).kind == FailureKind.CONFLICT


def test_update_doctor(doctors, appts):
    svc = DoctorAdminService(doctors, appts)
    existing = doctors.add("Dr. Old", slots=["09:00"])
    other = doctors.add("Dr. Other")

    res = svc.update_doctor(existing.id, _doctor(email=existing.email, slots=["10:00"]))
    assert res.success
    assert doctors.find_by_id(existing.id).available_times == ["10:00"]

    assert svc.update_doctor(existing.id, _doctor(email=other.email)).kind == FailureKind.CONFLICT
    assert svc.update_doctor(999, _doctor()).kind == FailureKind.NOT_FOUND


def test_delete_doctor_removes_their_appointments(doctors, appts):
    svc = DoctorAdminService(doctors, appts)
    d = doctors.add("Dr. Gone", slots=["09:00"])
    keep = doctors.add("Dr. Stay", slots=["09:00"])
    appts.add(d.id, 1, datetime(2024, 6, 1, 9, 0))
    appts.add(keep.id, 1, datetime(2024, 6, 1, 9, 0))

    assert svc.delete_doctor(d.id).success
    assert doctors.find_by_id(d.id) is None
    assert [a.doctor_id for a in appts.appts.values()] == [keep.id]
    assert svc.delete_doctor(d.id).kind == FailureKind.NOT_FOUND


def test_get_and_list(doctors, appts):
    svc = DoctorAdminService(doctors, appts)
    d = doctors.add("Dr. Seen")
    assert svc.get_doctor(d.id).data.name == "Dr. Seen"
    assert svc.get_doctor(999).kind == FailureKind.NOT_FOUND
    assert len(svc.list_doctors()) == 1
    doctors.down = True
    assert svc.list_doctors() == []
    assert svc.get_doctor(d.id).kind == FailureKind.STORE_FAULT
