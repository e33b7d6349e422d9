from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from authserver.auth.dependencies import get_current_user
from authserver.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from authserver.core import config
from authserver.database import get_db
from authserver.models.user import User
from authserver.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from authserver.services import auth_service

router = APIRouter(tags=['auth'])


def set_auth_cookies(response: Response, tokens: auth_service.IssuedTokens) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=tokens.access_token,
        max_age=config.JWT_EXPIRES_MINUTES * 60,
        domain=config.COOKIE_DOMAIN,
        httponly=True,
        samesite='strict',
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=tokens.refresh_token,
        max_age=config.REFRESH_TOKEN_EXPIRES_DAYS * 24 * 60 * 60,
        domain=config.COOKIE_DOMAIN,
        httponly=True,
        samesite='strict',
    )


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    user, tokens = auth_service.register(
        db,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password=data.password,
    )
    set_auth_cookies(response, tokens)
    return {'id': user.id}


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user, tokens = auth_service.login(db, email=data.email, password=data.password)
    set_auth_cookies(response, tokens)
    return {'id': user.id}


@router.get('/self', response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
