"""
Runtime configuration read from the environment (.env is loaded by main.py)
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "https://examupdt.com",
    "https://www.examupdt.com",
]


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    database_url: Optional[str] = None
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days
    session_check_timeout: float = 5.0
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    debug: bool = False
    log_level: str = "INFO"
    port: int = 8000
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    default_page_size: int = 10
    db_pool_min: int = 1
    db_pool_max: int = 20

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables"""
        origins = list(DEFAULT_ALLOWED_ORIGINS)
        env_origins = os.getenv("ALLOWED_ORIGINS", "")
        if env_origins:
            origins.extend([origin.strip() for origin in env_origins.split(",") if origin.strip()])

        return cls(
            database_url=os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL"),
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            jwt_expire_minutes=int(os.getenv("JWT_EXPIRE_MINUTES", str(cls.jwt_expire_minutes))),
            session_check_timeout=float(os.getenv("SESSION_CHECK_TIMEOUT", str(cls.session_check_timeout))),
            allowed_origins=origins,
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "8000")),
            admin_email=os.getenv("ADMIN_EMAIL"),
            admin_password=os.getenv("ADMIN_PASSWORD"),
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", "10")),
            db_pool_min=int(os.getenv("DB_POOL_MIN", "1")),
            db_pool_max=int(os.getenv("DB_POOL_MAX", "20")),
        )
