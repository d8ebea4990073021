"""
Security helpers: the admin gate and password hashing.

Admin access uses a single shared secret presented through HTTP Basic
credentials.  The username part of the credentials is ignored; only
the password is compared, in constant time, against the configured
``AUTH_SECRET``.  When no secret is configured the gate falls back to
the default password ``"admin"`` and logs a warning.  No session is
established, so every admin request must carry the header again.

Password hashing helpers (PBKDF2‑HMAC with SHA‑256) are used for the
stored user accounts.
"""

import hashlib
import hmac
import logging
import os
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import Settings, settings as default_settings
from .errors import UnauthorizedError


logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD = "admin"
ADMIN_AUTH_REQUIRED = "Admin authentication required"

security = HTTPBasic(auto_error=False)


def resolve_admin_secret(secret: Optional[str]) -> str:
    """Return the configured secret or the default password."""
    if not secret:
        logger.warning("AUTH_SECRET is not set; falling back to the default admin password")
        return DEFAULT_ADMIN_PASSWORD
    return secret


def is_admin_password(password: Optional[str], secret: Optional[str]) -> bool:
    """Check ``password`` against the admin secret.

    Parameters
    ----------
    password : Optional[str]
        Password part of the presented Basic credentials.
    secret : Optional[str]
        Configured ``AUTH_SECRET``.  Empty or ``None`` means the
        default password applies.

    Returns
    -------
    bool
        True if the password matches.
    """
    if password is None:
        return False
    expected = resolve_admin_secret(secret)
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(request: Request) -> None:
    """Dependency guarding admin routes.

    Raises ``UnauthorizedError`` (HTTP 401) when the request carries no
    Basic credentials, a Basic header that cannot be decoded, or a
    password that does not match.
    """
    credentials: Optional[HTTPBasicCredentials]
    try:
        credentials = await security(request)
    except HTTPException:
        # Undecodable credentials are treated like missing ones.
        credentials = None
    app_settings: Settings = getattr(request.app.state, "settings", None) or default_settings
    if credentials is None or not is_admin_password(credentials.password, app_settings.auth_secret):
        logger.info("Rejected admin request to %s", request.url.path)
        raise UnauthorizedError(ADMIN_AUTH_REQUIRED)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a
    ``$`` (salt in hex, then hash in hex).
    """
    salt = os.urandom(16)
    iterations = 100_000
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    iterations = 100_000
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(dk, stored_hash)
