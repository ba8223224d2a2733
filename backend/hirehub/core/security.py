"""
Recruiter credentials.

Passwords are stored as bcrypt hashes; a successful register or login returns
a signed JWT carrying the recruiter's id ("sub") and email.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from hirehub.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login attempt against the recruiter's stored bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Salted bcrypt hash stored in ``Recruiter.password``."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign ``data`` as a JWT with an ``exp`` claim.

    Args:
        data: Claims to sign
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES (7 days)

    Returns:
        The encoded token
    """
    to_encode = data.copy()
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + lifetime

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_recruiter_token(recruiter_id: str, email: str) -> str:
    """Bearer token returned by /api/recruiter/register and /api/recruiter/login."""
    return create_access_token(data={"sub": recruiter_id, "email": email})


def decode_access_token(token: str) -> Optional[dict]:
    """
    Return the claims of a recruiter token.

    None when the signature does not match or the token has expired; there is
    no revocation list, so a valid signature within its lifetime is enough.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except InvalidTokenError:
        return None
