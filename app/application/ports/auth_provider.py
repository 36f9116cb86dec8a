from dataclasses import dataclass
from typing import Optional, Protocol

ROLE_ADMIN = "admin"
ROLE_DOCTOR = "doctor"
ROLE_PATIENT = "patient"


@dataclass(frozen=True)
class Identity:
    id: int
    role: str


class AuthProvider(Protocol):
    def validate(self, token: str, expected_role: str) -> bool:
        ...

    def resolve_identity(self, token: str) -> Optional[Identity]:
        ...
