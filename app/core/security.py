"""
Placeholder login helpers and request provenance.

There is exactly one configured credential pair and tokens are opaque random
strings. Nothing here validates a token on later requests.
"""
import logging
import secrets
from typing import Optional

from starlette.requests import Request

from app.core.config import settings

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def check_credentials(username: str, password: str) -> bool:
    """Constant-time comparison against the configured pair."""
    username_ok = secrets.compare_digest(username.encode(), settings.admin_username.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.admin_password.encode())
    return username_ok and password_ok


def issue_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def get_client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("User-Agent")
