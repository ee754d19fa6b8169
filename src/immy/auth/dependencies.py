"""FastAPI auth dependencies.

Used as Depends() in protected route handlers to turn the
Authorization header into the subject the request acts as.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Header

from immy.auth.jwt import TokenError, verify_token
from immy.errors import Unauthenticated

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthenticatedSubject:
    """The account a request is acting as. Lives for one request."""

    user_id: int
    email: Optional[str] = None


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an Authorization header value.

    The "Bearer " prefix is optional; a bare token is accepted as is.
    """
    if not authorization:
        return None
    value = authorization.strip()
    if value.startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    return value or None


def authenticate(authorization: Optional[str]) -> AuthenticatedSubject:
    """Verify the header value and return the subject, or raise Unauthenticated."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthenticated("Authorization required", reason="missing_header")

    try:
        claims = verify_token(token)
    except TokenError as e:
        logger.info("auth.token_rejected", reason=e.reason)
        raise Unauthenticated("Invalid or expired token", reason=e.reason)

    return AuthenticatedSubject(user_id=claims.subject, email=claims.email)


async def get_current_subject(
    authorization: Optional[str] = Header(None),
) -> AuthenticatedSubject:
    """Extract the authenticated subject (required: 401 if absent or invalid)."""
    return authenticate(authorization)
