"""
Security utilities for password hashing and session cookie signing.

The session cookie never carries session data: it is a signed token holding
the session id and an absolute expiry fixed at session creation.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against its stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unknown or malformed hash
        logger.warning("Password verification against malformed hash")
        return False


@dataclass(frozen=True)
class SessionToken:
    """Decoded session cookie payload."""
    session_id: str
    issued_at: datetime
    expires_at: datetime


class SessionCookieSigner:
    """
    Signs and verifies session cookies.

    The expiry is absolute: it is computed once from the issue time and the
    token is never re-issued for the same session.
    """

    def __init__(self, secret_key: str, max_age: timedelta, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.max_age = max_age
        self.algorithm = algorithm

    def encode(self, session_id: str, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed cookie value for a session.

        Args:
            session_id: Server-side session identifier
            issued_at: Session creation time (defaults to now)

        Returns:
            str: Encoded token
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sid": session_id,
            "iat": issued_at,
            "exp": issued_at + self.max_age,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[SessionToken]:
        """
        Verify a cookie value.

        Returns:
            SessionToken, or None when the token is expired, tampered or malformed
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.debug("Session cookie expired")
            return None
        except JWTError as e:
            logger.debug(f"Rejected session cookie: {e}")
            return None

        session_id = payload.get("sid")
        if not session_id:
            return None

        return SessionToken(
            session_id=session_id,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
