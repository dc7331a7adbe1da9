"""
Tests for the admin session gate and the auth service behind it
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from examupdt.errors import AuthError
from examupdt.models.schemas import AuthUser
from examupdt.services.session_gate import Session, SessionGate, Unauthenticated

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


class TestSessionGate:
    async def test_valid_session(self):
        auth_service = MagicMock()
        auth_service.get_session = AsyncMock(return_value=AuthUser(id='u1', email='a@b.com'))

        access = await SessionGate(auth_service).check_access('token')

        assert isinstance(access, Session)
        assert access.user.email == 'a@b.com'

    async def test_missing_token_is_denied_without_a_lookup(self):
        auth_service = MagicMock()
        auth_service.get_session = AsyncMock()

        access = await SessionGate(auth_service).check_access(None)

        assert isinstance(access, Unauthenticated)
        assert access.redirect_to == '/admin/login'
        auth_service.get_session.assert_not_called()

    async def test_provider_failure_fails_closed(self):
        auth_service = MagicMock()
        auth_service.get_session = AsyncMock(side_effect=ConnectionError('provider unreachable'))

        access = await SessionGate(auth_service).check_access('token')

        assert isinstance(access, Unauthenticated)
        assert access.reason == 'Session check failed'

    async def test_slow_provider_times_out_closed(self):
        async def never_answers(token):
            await asyncio.sleep(10)

        auth_service = MagicMock()
        auth_service.get_session = never_answers

        access = await SessionGate(auth_service, timeout=0.05).check_access('token')

        assert isinstance(access, Unauthenticated)
        assert access.reason == 'Session check timed out'


class TestAuthService:
    async def test_sign_in_and_session(self, auth_service, admin_token):
        user = await auth_service.get_session(admin_token)
        assert user.email == ADMIN_EMAIL
        assert user.name == 'Admin'

    async def test_wrong_password(self, auth_service):
        await auth_service.ensure_admin(ADMIN_EMAIL, ADMIN_PASSWORD)
        with pytest.raises(AuthError) as exc_info:
            await auth_service.sign_in(ADMIN_EMAIL, 'not-the-password')
        assert exc_info.value.message == 'Invalid login credentials'

    async def test_unknown_user(self, auth_service):
        with pytest.raises(AuthError):
            await auth_service.sign_in('nobody@examupdt.com', ADMIN_PASSWORD)

    async def test_sign_out_revokes_token(self, auth_service, admin_token):
        await auth_service.sign_out(admin_token)
        assert await auth_service.get_session(admin_token) is None

    async def test_sign_out_twice_keeps_one_revocation(self, auth_service, admin_token, store):
        await auth_service.sign_out(admin_token)
        await auth_service.sign_out(admin_token)

        assert len(store.table('revoked_tokens').rows) == 1
        assert await auth_service.get_session(admin_token) is None

    async def test_garbage_token_has_no_session(self, auth_service):
        assert await auth_service.get_session('not-a-jwt') is None

    async def test_ensure_admin_is_idempotent(self, auth_service, store):
        await auth_service.ensure_admin(ADMIN_EMAIL, ADMIN_PASSWORD)
        await auth_service.ensure_admin(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert len(store.table('admin_users').rows) == 1
