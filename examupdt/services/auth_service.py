#!/usr/bin/env python3
"""
Identity provider for admin sessions.
Email/password sign-in against the admin_users table, JWT access tokens,
sign-out by revoking the token id.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext

from examupdt.errors import AuthError
from examupdt.models.schemas import AuthUser

logger = logging.getLogger(__name__)

USERS_TABLE = "admin_users"
REVOKED_TABLE = "revoked_tokens"


@dataclass
class SignInResult:
    user: AuthUser
    token: str


class AuthService:
    """Handler for authentication operations"""

    def __init__(self, store, secret: str, expire_minutes: int = 60 * 24 * 7, algorithm: str = "HS256"):
        self.users = store.table(USERS_TABLE)
        self.revoked = store.table(REVOKED_TABLE)
        self.secret = secret
        self.algorithm = algorithm
        self.access_token_expire_minutes = expire_minutes
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash_password(self, password: str) -> str:
        """Hash password using bcrypt"""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    def create_access_token(self, user: AuthUser) -> str:
        """Create JWT access token"""
        payload = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "jti": uuid.uuid4().hex,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=self.access_token_expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict:
        """Decode JWT token; AuthError when invalid or expired"""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise AuthError("Invalid or expired token")

    async def _find_user(self, email: str) -> Optional[dict]:
        rows = await run_in_threadpool(self.users.select, filters={'email': email.lower().strip()})
        return rows[0] if rows else None

    async def sign_in(self, email: str, password: str) -> SignInResult:
        logger.info(f"🔐 Signin request for: {email}")
        row = await self._find_user(email)
        if not row or not self.verify_password(password, row.get('password_hash', '')):
            logger.warning(f"❌ Invalid credentials for user: {email}")
            raise AuthError("Invalid login credentials")

        user = AuthUser(id=str(row['id']), email=row['email'], name=row.get('name'))
        token = self.create_access_token(user)
        logger.info(f"✅ User signed in: {user.email}")
        return SignInResult(user=user, token=token)

    async def sign_out(self, token: str) -> None:
        claims = self.decode_token(token)
        if await run_in_threadpool(self.revoked.get, claims['jti']):
            logger.info(f"👋 Token already signed out: {claims.get('email', '')}")
            return
        await run_in_threadpool(self.revoked.insert, {
            'id': claims['jti'],
            'revoked_at': datetime.now(timezone.utc).isoformat(),
        })
        logger.info(f"👋 Signed out: {claims.get('email', '')}")

    async def get_session(self, token: Optional[str]) -> Optional[AuthUser]:
        """Current user for a token, or None when there is no valid session"""
        if not token:
            return None
        try:
            claims = self.decode_token(token)
        except AuthError:
            return None

        revoked = await run_in_threadpool(self.revoked.get, claims.get('jti', ''))
        if revoked:
            return None

        return AuthUser(id=claims.get('sub', ''), email=claims.get('email', ''), name=claims.get('name'))

    async def ensure_admin(self, email: str, password: str, name: Optional[str] = None) -> AuthUser:
        """Create the bootstrap admin account unless it already exists"""
        row = await self._find_user(email)
        if row is None:
            row = await run_in_threadpool(self.users.insert, {
                'email': email.lower().strip(),
                'name': name,
                'password_hash': self.hash_password(password),
                'created_at': datetime.now(timezone.utc).isoformat(),
            })
            logger.info(f"👤 Admin account created: {row['email']}")
        return AuthUser(id=str(row['id']), email=row['email'], name=row.get('name'))
