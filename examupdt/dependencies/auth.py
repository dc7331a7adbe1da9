#!/usr/bin/env python3
"""
Authentication dependencies for FastAPI dependency injection
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from examupdt.errors import AuthError
from examupdt.models.schemas import AuthUser
from examupdt.services.auth_service import AuthService
from examupdt.services.session_gate import SessionGate

logger = logging.getLogger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)


def get_store(request: Request):
    """Store client built by the application lifespan"""
    return request.app.state.store


def get_auth_service(request: Request) -> AuthService:
    """Dependency to get the AuthService instance"""
    return request.app.state.auth_service


def get_session_gate(request: Request) -> SessionGate:
    return SessionGate(request.app.state.auth_service, timeout=request.app.state.settings.session_check_timeout)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    """Get current user from token (required - raises 401 if no valid session)"""
    if not token:
        raise AuthError("Authentication required")

    user = await auth_service.get_session(token)
    if user is None:
        raise AuthError("Invalid or expired token")

    logger.info(f"🔐 Token verified for: {user.email}")
    return user
