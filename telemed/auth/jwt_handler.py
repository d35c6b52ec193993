"""Bearer tokens that identify a doctor by email."""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from telemed.core import config
from telemed.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=expires_minutes or config.JWT_EXPIRES_MINUTES)
    payload = {"sub": subject, "iat": issued_at, "exp": expires_at}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def doctor_email_from_token(token: str) -> str:
    """Return the doctor email carried in ``sub``, or raise 401."""
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token expired") from exc
    except jwt.MissingRequiredClaimError as exc:
        raise UnauthorizedError("Invalid token subject") from exc
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise UnauthorizedError("Invalid token") from exc

    email = payload["sub"]
    if not email:
        raise UnauthorizedError("Invalid token subject")
    return email
