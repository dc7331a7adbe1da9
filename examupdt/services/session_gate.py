"""
Session gate for admin screens.

Checked once when an admin screen is entered. It is a convenience, not the
security boundary: mutation routes authenticate on their own. Any failure
while checking (network, store, timeout) counts as no session.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from examupdt.models.schemas import AuthUser

logger = logging.getLogger(__name__)

LOGIN_PATH = "/admin/login"


@dataclass(frozen=True)
class Session:
    user: AuthUser
    token: str


@dataclass(frozen=True)
class Unauthenticated:
    reason: str = "No valid session"
    redirect_to: str = LOGIN_PATH


class SessionGate:
    def __init__(self, auth_service, timeout: float = 5.0):
        self.auth_service = auth_service
        self.timeout = timeout

    async def check_access(self, token: Optional[str]) -> Union[Session, Unauthenticated]:
        if not token:
            return Unauthenticated("No token provided")
        try:
            user = await asyncio.wait_for(self.auth_service.get_session(token), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("⚠️ Session check timed out")
            return Unauthenticated("Session check timed out")
        except Exception as e:
            logger.warning(f"⚠️ Session check failed: {str(e)}")
            return Unauthenticated("Session check failed")

        if user is None:
            return Unauthenticated("Invalid session")
        return Session(user=user, token=token)
