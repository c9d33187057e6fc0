from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from budget_tracker.config import Settings
from budget_tracker.errors import Forbidden, Unauthorized
from budget_tracker.security.tokens import TokenError, TokenService
from budget_tracker.users import schemas

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> schemas.CurrentUser:
    """
    Gate for every protected route.

    Validity is purely cryptographic and time based: the user table is not
    consulted, so a token stays usable until it expires even after logout.
    Expired and forged tokens both yield 403 so clients fall back to /refresh.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing bearer token")

    try:
        payload = token_service.verify_access_token(credentials.credentials)
    except TokenError as exc:
        logger.debug(f"Access token rejected: {exc}")
        raise Forbidden("Invalid or expired token")

    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise Forbidden("Invalid or expired token")

    return schemas.CurrentUser(id=user_id)
