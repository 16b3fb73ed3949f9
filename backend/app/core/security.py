"""
Credential handling: argon2 password hashes and signed bearer tokens.

The signing key is handed to TokenService when it is built, so nothing
below reads process-wide state.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError

from app.core.config import settings
from app.core.errors import UnauthorizedError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHash):
        return False


@dataclass(frozen=True)
class Identity:
    subject_id: int
    email: str


class TokenService:
    """Issues and verifies the admin's bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_hours: int = 12):
        if not secret:
            raise ValueError("A signing key is required")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_hours = expires_hours

    def issue(self, subject_id: int, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "email": email,
            "iat": now,
            "exp": now + timedelta(hours=self.expires_hours),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
            return Identity(subject_id=int(payload["sub"]), email=payload.get("email", ""))
        except (jwt.PyJWTError, ValueError) as exc:
            raise UnauthorizedError("Invalid or expired token.") from exc


def build_token_service() -> TokenService:
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_hours=settings.JWT_EXPIRES_HOURS,
    )
