"""
Register / login / refresh / logout.

Each user holds at most one live refresh token. Login and register overwrite
it (ending any other session for that user), refresh only reads it, and
logout clears it.
"""

from typing import NamedTuple, Optional

from fastapi import Response
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from budget_tracker.config import Settings
from budget_tracker.errors import Conflict, Forbidden, InternalError, Unauthorized
from budget_tracker.security.passwords import dummy_verify, hash_password, verify_password
from budget_tracker.security.tokens import TokenError, TokenService
from budget_tracker.users import crud
from budget_tracker.users.models import User


class SessionTokens(NamedTuple):
    access_token: str
    refresh_token: str


def _start_session(db: Session, token_service: TokenService, user: User) -> SessionTokens:
    access_token = token_service.issue_access_token(user.id)
    refresh_token = token_service.issue_refresh_token(user.id)

    # Rotate, never append
    user.refresh_token = refresh_token
    db.commit()

    return SessionTokens(access_token, refresh_token)


# =========================
# Register
# =========================
def register(db: Session, token_service: TokenService, username: str, password: str) -> SessionTokens:
    if crud.get_user_by_username(db, username):
        raise Conflict("Username already exists")

    try:
        user = crud.create_user(db, username, hash_password(password))
        tokens = _start_session(db, token_service, user)
    except IntegrityError:
        # lost a race with a concurrent registration of the same name
        db.rollback()
        raise Conflict("Username already exists")
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Could not register {username}: {exc}")
        raise InternalError()

    logger.info(f"User registered: {username}")
    return tokens


# =========================
# Login
# =========================
def login(db: Session, token_service: TokenService, username: str, password: str) -> SessionTokens:
    user = crud.get_user_by_username(db, username)
    if not user:
        dummy_verify()
        logger.warning(f"Authentication denied for username: {username}")
        raise Unauthorized("Invalid credentials")

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Authentication denied for username: {username}")
        raise Unauthorized("Invalid credentials")

    try:
        tokens = _start_session(db, token_service, user)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Could not store session for {username}: {exc}")
        raise InternalError()

    logger.info(f"User authenticated: {username}")
    return tokens


# =========================
# Refresh
# =========================
def refresh(db: Session, token_service: TokenService, refresh_token: Optional[str]) -> str:
    """Exchange the stored refresh token for a new access token.

    The user is looked up by the raw token value first, then the signature
    and embedded id are checked. The refresh token itself is not rotated.
    """
    if not refresh_token:
        raise Unauthorized("Refresh token missing")

    user = crud.get_user_by_refresh_token(db, refresh_token)
    if not user:
        logger.warning("Refresh denied: token is not held by any user")
        raise Forbidden("Invalid refresh token")

    try:
        payload = token_service.verify_refresh_token(refresh_token)
    except TokenError as exc:
        logger.warning(f"Refresh denied for user {user.id}: {exc}")
        raise Forbidden("Invalid refresh token")

    if payload.get("id") != user.id:
        logger.warning(f"Refresh denied for user {user.id}: embedded id mismatch")
        raise Forbidden("Invalid refresh token")

    return token_service.issue_access_token(user.id)


# =========================
# Logout
# =========================
def logout(db: Session, refresh_token: Optional[str]) -> None:
    """End the session held by refresh_token. Unknown or missing tokens are a no-op."""
    if not refresh_token:
        return

    user = crud.get_user_by_refresh_token(db, refresh_token)
    if not user:
        return

    try:
        user.refresh_token = None
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Could not clear session for user {user.id}: {exc}")
        raise InternalError()

    logger.info(f"User logged out: {user.username}")


# =========================
# Cookie helpers
# =========================
def set_refresh_cookie(response: Response, refresh_token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_SECONDS,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
