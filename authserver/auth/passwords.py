"""
Password hashing and verification.

bcrypt only reads the first 72 bytes of its input, and current releases
refuse anything longer, so the limit is enforced here rather than letting
bcrypt truncate or fail mid-request. Request validation checks the same
limit through ``exceeds_max_length`` so callers get a 400 instead.
"""

import bcrypt

from authserver.core import config

MAX_PASSWORD_BYTES = 72


def exceeds_max_length(password: str) -> bool:
    return len(password.encode()) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    if exceeds_max_length(password):
        raise ValueError(f'Password must not exceed {MAX_PASSWORD_BYTES} bytes.')
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    # Anything over the limit could never have been stored.
    if exceeds_max_length(password):
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
