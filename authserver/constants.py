"""Shared constants for the auth service."""

from enum import Enum


class Roles(str, Enum):
    """Authorization tiers a user can hold."""

    CUSTOMER = "customer"
    ADMIN = "admin"
    MANAGER = "manager"


DEFAULT_ROLE = Roles.CUSTOMER

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"
