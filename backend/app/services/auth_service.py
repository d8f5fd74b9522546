"""
backend/app/services/auth_service.py

Purpose:
    Admin credential handling: argon2 hashing and the FastAPI dependencies
    that check the X-Admin-Password header.
"""

import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError
from fastapi import Depends, HTTPException, Request, status

from app.services.contest_service import ContestService, get_contest_service

logger = logging.getLogger("survivorpool.auth")
ph = PasswordHasher()

ADMIN_HEADER = "X-Admin-Password"


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return ph.verify(hashed, password)
    except (VerifyMismatchError, InvalidHashError):
        return False


async def authenticate_admin(service: ContestService, password: str | None) -> bool:
    if not password:
        return False
    config = await service.load_config()
    return verify_password(password, config.admin_password_hash)


async def is_admin_request(
    request: Request,
    service: ContestService = Depends(get_contest_service),
) -> bool:
    """FastAPI dependency: True when the admin header carries the right password."""
    return await authenticate_admin(service, request.headers.get(ADMIN_HEADER))


async def require_admin(
    request: Request,
    admin: bool = Depends(is_admin_request),
) -> bool:
    """FastAPI dependency: rejects requests without a valid admin password."""
    if not admin:
        logger.warning("Admin auth failed: %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return True
