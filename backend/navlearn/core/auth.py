"""Session tokens, password hashing and the auth dependencies for routes."""

import hashlib
import hmac
import logging
import secrets
from fastapi import Depends, Header, HTTPException, Query

from navlearn.core.storage import DataRepository, get_repository
from navlearn.core.tracing import mask_token

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000


def new_session_token() -> str:
    """16 random bytes, hex-encoded."""
    return secrets.token_hex(16)


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password as `salt$hexdigest` using PBKDF2-SHA256."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    salt, _, _ = password_hash.partition("$")
    if not salt:
        return False
    return hmac.compare_digest(hash_password(password, salt), password_hash)


def get_session_token(
    token: str | None = Query(None, description="Session token"),
    authorization: str | None = Header(None),
) -> str:
    """Read the session token from `?token=` or an `Authorization: Bearer` header."""
    if token:
        return token

    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()

    raise HTTPException(status_code=401, detail="Missing token")


def require_user(
    token: str = Depends(get_session_token),
    repository: DataRepository = Depends(get_repository),
) -> str:
    """Dependency resolving a trainee session token to the trainee's email."""
    email = repository.read().sessions.get(token)
    if not email:
        logger.warning(f"Rejected user session token {mask_token(token)}")
        raise HTTPException(status_code=401, detail="Unauthorized")
    return email


def require_admin(
    token: str = Depends(get_session_token),
    repository: DataRepository = Depends(get_repository),
) -> str:
    """Dependency resolving an admin session token to the admin's email."""
    email = repository.read().admin_sessions.get(token)
    if not email:
        logger.warning(f"Rejected admin session token {mask_token(token)}")
        raise HTTPException(status_code=401, detail="Unauthorized")
    return email
