"""Account creation, credential checks and token issuance."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authserver.auth import jwt_handler
from authserver.auth.passwords import hash_password, verify_password
from authserver.constants import DEFAULT_ROLE
from authserver.core import config
from authserver.models.refresh_token import RefreshToken
from authserver.models.user import User

logger = logging.getLogger(__name__)

EMAIL_EXISTS_MESSAGE = 'Email is already exists!'
INVALID_CREDENTIALS_MESSAGE = 'Email or password does not match.'

_DUMMY_PASSWORD_HASH = hash_password('no-such-account-password')


@dataclass
class IssuedTokens:
    access_token: str
    refresh_token: str


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def _persist_refresh_token(db: Session, user: User) -> RefreshToken:
    expires_at = datetime.now(timezone.utc) + timedelta(days=config.REFRESH_TOKEN_EXPIRES_DAYS)
    refresh_token = RefreshToken(user_id=user.id, expires_at=expires_at)
    db.add(refresh_token)
    db.flush()
    return refresh_token


def issue_tokens(db: Session, user: User) -> IssuedTokens:
    """Persist a refresh token row for ``user`` and sign both tokens.

    The caller owns the transaction; nothing is committed here.
    """
    refresh_record = _persist_refresh_token(db, user)
    access_token = jwt_handler.create_access_token(subject=str(user.id), role=user.role)
    refresh_token = jwt_handler.create_refresh_token(
        subject=str(user.id),
        role=user.role,
        token_id=refresh_record.id,
        expires_at=refresh_record.expires_at,
    )
    logger.debug('Issued refresh token %s for user %s', refresh_record.id, user.id)
    return IssuedTokens(access_token=access_token, refresh_token=refresh_token)


def register(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
) -> tuple[User, IssuedTokens]:
    if find_user_by_email(db, email) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_EXISTS_MESSAGE)

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=hash_password(password),
        role=DEFAULT_ROLE.value,
    )
    try:
        db.add(user)
        db.flush()
        tokens = issue_tokens(db, user)
        db.commit()
    except IntegrityError as exc:
        # Unique constraint on email lost a race with a concurrent registration.
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_EXISTS_MESSAGE) from exc
    except Exception:
        db.rollback()
        raise

    logger.info('Registered user %s', user.id)
    return user, tokens


def login(db: Session, email: str, password: str) -> tuple[User, IssuedTokens]:
    user = find_user_by_email(db, email)
    if user is None:
        # Same bcrypt cost as a real check, so response time does not reveal unknown emails.
        verify_password(password, _DUMMY_PASSWORD_HASH)
        matched = False
    else:
        matched = verify_password(password, user.password)
    if not matched:
        logger.info('Rejected login attempt')
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_CREDENTIALS_MESSAGE)

    try:
        tokens = issue_tokens(db, user)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info('User %s logged in', user.id)
    return user, tokens
