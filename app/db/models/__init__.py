# Models package (re-export feature modules for stable imports)
from .users.patient import Patient
from .health.doctor import Doctor
from .health.appointment import Appointment
from .health.prescription import Prescription

__all__ = [
    "Patient",
    "Doctor",
    "Appointment",
    "Prescription",
]
