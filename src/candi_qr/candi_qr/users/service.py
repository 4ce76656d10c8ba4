from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.tokens import TokenService
from ..common.validators import (
    optional_str,
    parse_bool,
    require_choice,
    require_min_length,
    require_non_empty,
)
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    InactiveUserError,
    ValidationError,
)
from .model import NewAccount, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Username atau password salah"
INACTIVE_MESSAGE = "User tidak ditemukan atau tidak aktif"
ACCOUNT_TAKEN_MESSAGE = "Username atau email sudah digunakan"


def hash_password(password: Any) -> str:
    return generate_password_hash(require_min_length(password, "Password", MIN_PASSWORD_LENGTH))


def build_account(data: dict, *, default_password: Optional[str] = None) -> NewAccount:
    """Validate the login fields shared by every kind of account."""
    username = require_non_empty(data.get("username"), "Username")
    full_name = require_non_empty(data.get("full_name"), "Nama lengkap")
    email = optional_str(data.get("email"))

    password = data.get("password") or default_password
    if not password:
        raise ValidationError("Password harus diisi")

    return NewAccount(
        username=username,
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        phone=optional_str(data.get("phone")),
    )


def account_updates(data: dict) -> dict:
    """User columns to change on PUT; the password only changes when given."""
    fields: dict[str, Any] = {}
    for key in ("username", "full_name"):
        if key in data:
            fields[key] = require_non_empty(data.get(key), key)
    for key in ("email", "phone"):
        if key in data:
            fields[key] = optional_str(data.get(key))
    if data.get("password"):
        fields["password_hash"] = hash_password(data["password"])
    if "is_active" in data:
        fields["is_active"] = parse_bool(data["is_active"], "is_active")
    return fields


class AuthService:
    """Use case: login, bearer-token authentication and the caller's own profile."""

    def __init__(self, users: UserRepository, tokens: TokenService, *, students=None, teachers=None):
        self._users = users
        self._tokens = tokens
        self._students = students
        self._teachers = teachers

    def login(self, identifier: Any, password: Any) -> dict:
        identifier = optional_str(identifier)
        password = "" if password is None else str(password)
        if not identifier or not password:
            raise ValidationError("Username dan password harus diisi")

        user = self._users.get_by_login(identifier)
        if not user or not user.is_active:
            logger.warning("Login rejected for %r", identifier)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.warning("Login rejected for %r", identifier)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        return {"token": self._tokens.issue(user), "user": self.profile(user)}

    def authenticate_token(self, token: str) -> User:
        claims = self._tokens.decode(token)
        user = self._users.get_by_id(int(claims["user_id"]))
        if not user or not user.is_active:
            logger.warning("Token for inactive or missing user id=%s", claims["user_id"])
            raise InactiveUserError(INACTIVE_MESSAGE)
        return user

    def profile(self, user: User) -> dict:
        """User fields merged with the role profile (student or teacher)."""
        data = user.public()
        extra = None
        if user.role == Role.STUDENT and self._students is not None:
            extra = self._students.get_by_user_id(user.id)
        elif user.role == Role.TEACHER and self._teachers is not None:
            extra = self._teachers.get_by_user_id(user.id)

        if extra is not None:
            profile = asdict(extra)
            profile_id = profile.pop("id")
            profile.pop("user_id", None)
            for key, value in profile.items():
                data.setdefault(key, value)
            data[f"{user.role.value}_id"] = profile_id
        return data

    def update_profile(self, user: User, data: dict) -> dict:
        fields: dict[str, Any] = {}
        if optional_str(data.get("full_name")):
            fields["full_name"] = optional_str(data.get("full_name"))
        if optional_str(data.get("phone")):
            fields["phone"] = optional_str(data.get("phone"))
        email = optional_str(data.get("email"))
        if email:
            if self._users.has_conflict(username=None, email=email, exclude_user_id=user.id):
                raise ConflictError("Email sudah digunakan")
            fields["email"] = email

        if not fields:
            raise ValidationError("Tidak ada data yang diupdate")

        self._users.update_fields(user.id, **fields)
        return self.profile(self._users.get_by_id(user.id) or user)

    def register(self, data: dict) -> dict:
        role = require_choice(data.get("role"), "Role", Role)
        account = build_account(data)
        if not account.email:
            raise ValidationError("Semua field wajib diisi")
        if self._users.has_conflict(username=account.username, email=account.email):
            raise ConflictError(ACCOUNT_TAKEN_MESSAGE)

        user_id = self._users.create_user(
            username=account.username,
            email=account.email,
            password_hash=account.password_hash,
            role=role,
            full_name=account.full_name,
            phone=account.phone,
        )
        logger.info("Registered user id=%s role=%s", user_id, role.value)
        return {
            "id": user_id,
            "username": account.username,
            "email": account.email,
            "role": role.value,
            "full_name": account.full_name,
        }
