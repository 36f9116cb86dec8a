from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import logging
import jwt

from ...application.ports.auth_provider import AuthProvider, Identity

logger = logging.getLogger(__name__)


class JwtAuthProvider(AuthProvider):
    """Role-scoped bearer tokens signed with a shared secret.

    Claims: ``sub`` (entity id as a string), ``role`` and ``exp``.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 60) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def create_access_token(self, subject_id: int, role: str, expires_minutes: Optional[int] = None) -> str:
        expire = datetime.utcnow() + timedelta(minutes=expires_minutes or self.expires_minutes)
        to_encode = {"sub": str(subject_id), "role": role, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return None

    def validate(self, token: str, expected_role: str) -> bool:
        payload = self.decode(token)
        if not payload:
            return False
        return payload.get("role") == expected_role and payload.get("sub") is not None

    def resolve_identity(self, token: str) -> Optional[Identity]:
        payload = self.decode(token)
        if not payload:
            return None
        try:
            return Identity(id=int(payload["sub"]), role=str(payload.get("role")))
        except (KeyError, TypeError, ValueError):
            logger.warning("Token carries no usable subject")
            return None
