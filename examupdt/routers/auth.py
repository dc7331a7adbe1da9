#!/usr/bin/env python3
"""
Auth router for the admin area
Email/password sign-in, sign-out and the admin session check
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from examupdt.dependencies.auth import get_auth_service, get_bearer_token, get_session_gate
from examupdt.errors import AuthError
from examupdt.models.schemas import SignInRequest, TokenResponse
from examupdt.services.auth_service import AuthService
from examupdt.services.session_gate import Session, SessionGate

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/signin", response_model=TokenResponse)
async def signin(credentials: SignInRequest, auth_service: AuthService = Depends(get_auth_service)):
    """
    Admin signin endpoint - email/password authentication
    """
    result = await auth_service.sign_in(credentials.email, credentials.password)
    return TokenResponse(access_token=result.token, user=result.user)


@router.post("/signout")
async def signout(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    if not token:
        raise AuthError("Authentication required")
    await auth_service.sign_out(token)
    return {'success': True}


@router.get("/session")
async def get_session(
    token: Optional[str] = Depends(get_bearer_token),
    gate: SessionGate = Depends(get_session_gate),
):
    """
    Admin screen entry check. Never errors: an unknown session answers with
    authenticated=false and where to redirect.
    """
    access = await gate.check_access(token)
    if isinstance(access, Session):
        return {'success': True, 'authenticated': True, 'user': access.user.model_dump()}

    logger.info(f"🔐 Session check denied: {access.reason}")
    return {
        'success': True,
        'authenticated': False,
        'reason': access.reason,
        'redirect_to': access.redirect_to,
    }
