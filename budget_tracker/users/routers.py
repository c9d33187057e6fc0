from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from budget_tracker.config import Settings
from budget_tracker.database import get_db
from budget_tracker.security.tokens import TokenService
from budget_tracker.users import schemas, service
from budget_tracker.users.auth import get_app_settings, get_token_service

router = APIRouter()


@router.post(
    "/register",
    response_model=schemas.AccessTokenSchema,
    status_code=status.HTTP_201_CREATED,
)
def register(
    credentials: schemas.CredentialsSchema,
    response: Response,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    tokens = service.register(db, token_service, credentials.user, credentials.pwd)
    service.set_refresh_cookie(response, tokens.refresh_token, settings)
    return {"accessToken": tokens.access_token}


@router.post("/login", response_model=schemas.AccessTokenSchema)
def login(
    credentials: schemas.CredentialsSchema,
    response: Response,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    tokens = service.login(db, token_service, credentials.user, credentials.pwd)
    service.set_refresh_cookie(response, tokens.refresh_token, settings)
    return {"accessToken": tokens.access_token}


@router.post("/refresh", response_model=schemas.AccessTokenSchema)
def refresh(
    request: Request,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    refresh_token = request.cookies.get(settings.COOKIE_NAME)
    access_token = service.refresh(db, token_service, refresh_token)
    return {"accessToken": access_token}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    service.logout(db, request.cookies.get(settings.COOKIE_NAME))

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    service.clear_refresh_cookie(response, settings)
    return response
