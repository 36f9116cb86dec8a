from datetime import datetime

from app.application.services.availability_service import AvailabilityService


def test_booked_slot_is_removed_for_that_day_only(doctors, appts):
    d1 = doctors.add("Dr. House", slots=["09:00", "10:00", "11:00"])
    appts.add(d1.id, 7, datetime(2024, 6, 1, 10, 0))
    svc = AvailabilityService(doctors, appts)

    assert svc.compute_availability(d1.id, "2024-06-01") == ["09:00", "11:00"]
    assert svc.compute_availability(d1.id, "2024-06-02") == ["09:00", "10:00", "11:00"]


def test_result_is_sorted_whatever_the_configured_order(doctors, appts):
    d = doctors.add("Dr. Grey", slots=["15:30", "08:00", "11:15"])
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "2024-06-01") == ["08:00", "11:15", "15:30"]


def test_unknown_doctor_has_no_availability(doctors, appts):
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(999, "2024-06-01") == []


def test_doctor_without_slots_has_no_availability(doctors, appts):
    d = doctors.add("Dr. Empty", slots=[])
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "2024-06-01") == []


def test_fully_booked_day(doctors, appts):
    d = doctors.add("Dr. Busy", slots=["09:00", "10:00"])
    appts.add(d.id, 1, datetime(2024, 6, 1, 9, 0))
    appts.add(d.id, 2, datetime(2024, 6, 1, 10, 0))
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "2024-06-01") == []


def test_off_grid_booking_does_not_remove_a_slot(doctors, appts):
    d = doctors.add("Dr. Odd", slots=["09:00", "10:00"])
    appts.add(d.id, 1, datetime(2024, 6, 1, 9, 30))
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "2024-06-01") == ["09:00", "10:00"]


def test_last_second_of_day_is_inside_the_window(doctors, appts):
    d = doctors.add("Dr. Night", slots=["23:59:59", "09:00"])
    appts.add(d.id, 1, datetime(2024, 6, 1, 23, 59, 59))
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "2024-06-01") == ["09:00"]


def test_repeated_queries_return_the_same_result(doctors, appts):
    d = doctors.add("Dr. Same", slots=["09:00", "10:00"])
    appts.add(d.id, 1, datetime(2024, 6, 1, 10, 0))
    svc = AvailabilityService(doctors, appts)
    first = svc.compute_availability(d.id, "2024-06-01")
    assert svc.compute_availability(d.id, "2024-06-01") == first
    assert len(appts.appts) == 1


def test_store_fault_reads_as_no_availability(doctors, appts):
    d = doctors.add("Dr. Down", slots=["09:00"])
    appts.down = True
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "2024-06-01") == []


def test_malformed_date_reads_as_no_availability(doctors, appts):
    d = doctors.add("Dr. Date", slots=["09:00"])
    svc = AvailabilityService(doctors, appts)
    assert svc.compute_availability(d.id, "01/06/2024") == []
