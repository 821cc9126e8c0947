"""Registration, login and bearer-token verification.

Passwords are hashed with bcrypt; identity tokens are HS256 JWTs carrying
``userId`` and ``email``. Login failures never reveal whether the email is
registered.
"""

from __future__ import annotations

import re
from datetime import timedelta

import bcrypt
import jwt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from linksaver.errors import AuthError, ConflictError, ValidationError
from linksaver.extensions import db
from linksaver.models import User, utcnow


EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS = "Invalid credentials"
REGISTRATION_FAILED = "Registration failed"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def hash_password(password: str, rounds: int | None = None) -> str:
    if rounds is None:
        rounds = current_app.config["BCRYPT_ROUNDS"]
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def _read_credentials(payload: dict) -> tuple[str, str]:
    email = payload.get("email")
    password = payload.get("password")
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Email and password required")
    if not email or not password:
        raise ValidationError("Email and password required")
    try:
        email.encode("utf-8")
        password.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError("Email and password must be valid text")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return email, password


def register(payload: dict) -> User:
    email, password = _read_credentials(payload)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )
    if User.query.filter_by(email=email).first():
        raise ConflictError(REGISTRATION_FAILED)

    user = User(email=email, password_hash=hash_password(password))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(REGISTRATION_FAILED)
    return user


def issue_token(user: User) -> str:
    config = current_app.config
    now = utcnow()
    claims = {
        "userId": user.id,
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(days=config["JWT_EXPIRES_DAYS"]),
    }
    return jwt.encode(claims, config["JWT_SECRET"], algorithm=config["JWT_ALGORITHM"])


def login(payload: dict) -> str:
    email, password = _read_credentials(payload)
    # Short passwords can never match a stored hash; reject them with the
    # generic message so the response does not hint at the format rules.
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(INVALID_CREDENTIALS)

    user = User.query.filter_by(email=email).first()
    if not user or not check_password(password, user.password_hash):
        raise AuthError(INVALID_CREDENTIALS)
    return issue_token(user)


def verify(token: str | None) -> int | None:
    """Return the user id embedded in ``token``, or None when it is unusable."""
    if not token:
        return None
    config = current_app.config
    try:
        claims = jwt.decode(
            token,
            config["JWT_SECRET"],
            algorithms=[config["JWT_ALGORITHM"]],
            options={"require": ["exp", "userId"]},
        )
    except jwt.PyJWTError:
        return None
    user_id = claims.get("userId")
    if not isinstance(user_id, int):
        return None
    return user_id
