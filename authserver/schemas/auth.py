"""Request and response bodies for the /auth routes."""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from authserver.auth.passwords import MAX_PASSWORD_BYTES, exceeds_max_length

MIN_PASSWORD_LENGTH = 8


def _require(value: str, message: str) -> str:
    if not value or not value.strip():
        raise ValueError(message)
    return value


def _normalize_email(value: str) -> str:
    normalized = _require(value, 'Email is required!').strip()
    try:
        validate_email(normalized, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError('Email should be a valid email!') from exc
    return normalized


class RegisterRequest(BaseModel):
    model_config = ConfigDict(validate_default=True)

    first_name: str = Field('', alias='firstName')
    last_name: str = Field('', alias='lastName')
    email: str = ''
    password: str = ''

    @field_validator('first_name')
    @classmethod
    def validate_first_name(cls, value: str) -> str:
        return _require(value, 'First name is required!')

    @field_validator('last_name')
    @classmethod
    def validate_last_name(cls, value: str) -> str:
        return _require(value, 'Last name is required!')

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        _require(value, 'Password is required!')
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password length should be at least {MIN_PASSWORD_LENGTH} chars!')
        if exceeds_max_length(value):
            raise ValueError(f'Password should not be longer than {MAX_PASSWORD_BYTES} bytes!')
        return value


class LoginRequest(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: str = ''
    password: str = ''

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _require(value, 'Password is required!')


class AuthResponse(BaseModel):
    id: int


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    first_name: str = Field(alias='firstName')
    last_name: str = Field(alias='lastName')
    email: str
    role: str
