"""Signup and login endpoints for trainees and admins."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from navlearn.core.auth import hash_password, new_session_token, verify_password
from navlearn.core.config import settings
from navlearn.core.storage import DataRepository, get_repository
from navlearn.core.tracing import mask_email
from navlearn.models.records import AdminRecord, UserRecord

logger = logging.getLogger(__name__)

auth_router = APIRouter(tags=["auth"])


class SignupRequest(BaseModel):
    """Request model for trainee signup."""
    email: str
    first_name: str
    last_name: str
    serial: str = Field(..., description="Navigation system serial number")
    hospital: str
    password: str


class LoginRequest(BaseModel):
    """Request model for trainee and admin login."""
    email: str
    password: str


class UserSessionResponse(BaseModel):
    """Session token plus the trainee profile shown by the front end."""
    token: str
    name: str
    email: str
    serial: str
    hospital: str


class AdminSessionResponse(BaseModel):
    token: str
    email: str


def _session_response(user: UserRecord, token: str) -> UserSessionResponse:
    return UserSessionResponse(
        token=token,
        name=user.full_name,
        email=user.email,
        serial=user.serial,
        hospital=user.hospital,
    )


@auth_router.post("/signup", response_model=UserSessionResponse)
def signup(
    request_body: SignupRequest,
    repository: DataRepository = Depends(get_repository),
) -> UserSessionResponse:
    """Register a trainee and open a session for them."""
    fields = request_body.model_dump()
    if not all(str(v).strip() for v in fields.values()):
        raise HTTPException(status_code=400, detail="Missing fields")

    data = repository.read()
    if request_body.email in data.users:
        raise HTTPException(status_code=400, detail="Email already registered")

    user = UserRecord(
        email=request_body.email,
        first_name=request_body.first_name,
        last_name=request_body.last_name,
        serial=request_body.serial,
        hospital=request_body.hospital,
        password_hash=hash_password(request_body.password),
    )
    token = new_session_token()
    data.users[user.email] = user
    data.sessions[token] = user.email
    repository.write(data)

    logger.info(f"Registered trainee {mask_email(user.email)}")
    return _session_response(user, token)


@auth_router.post("/login", response_model=UserSessionResponse)
def login(
    request_body: LoginRequest,
    repository: DataRepository = Depends(get_repository),
) -> UserSessionResponse:
    """Open a trainee session."""
    if not request_body.email or not request_body.password:
        raise HTTPException(status_code=400, detail="Missing fields")

    data = repository.read()
    user = data.users.get(request_body.email)
    if not user or not verify_password(request_body.password, user.password_hash):
        logger.warning(f"Failed login for {mask_email(request_body.email)}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = new_session_token()
    data.sessions[token] = user.email
    repository.write(data)

    return _session_response(user, token)


@auth_router.post("/admin/login", response_model=AdminSessionResponse)
def admin_login(
    request_body: LoginRequest,
    repository: DataRepository = Depends(get_repository),
) -> AdminSessionResponse:
    """
    Open an admin session.

    The default admin account from settings is created on first use.
    """
    if not request_body.email or not request_body.password:
        raise HTTPException(status_code=400, detail="Missing fields")

    data = repository.read()

    if settings.DEFAULT_ADMIN_EMAIL not in data.admins:
        data.admins[settings.DEFAULT_ADMIN_EMAIL] = AdminRecord(
            email=settings.DEFAULT_ADMIN_EMAIL,
            password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
        )
        repository.write(data)
        logger.info(f"Seeded default admin {mask_email(settings.DEFAULT_ADMIN_EMAIL)}")

    admin = data.admins.get(request_body.email)
    if not admin or not verify_password(request_body.password, admin.password_hash):
        logger.warning(f"Failed admin login for {mask_email(request_body.email)}")
        raise HTTPException(status_code=401, detail="Invalid admin credentials")

    token = new_session_token()
    data.admin_sessions[token] = admin.email
    repository.write(data)

    return AdminSessionResponse(token=token, email=admin.email)
