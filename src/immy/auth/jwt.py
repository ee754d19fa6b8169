"""Bearer token issuance and verification.

Tokens are HS256 JWTs signed with the server-held secret, so a client
cannot mint a token for another account by re-encoding the claims.
The in-memory shape is TokenClaims; the wire shape is the standard
`sub`/`iat`/`exp` claim set plus `email`.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from immy.config import settings


class TokenError(Exception):
    """Raised when a token cannot be verified.

    `reason` tells expiry apart from malformed or forged input for
    logging. Callers report all of them to the client the same way.
    """

    def __init__(self, message: str, reason: str = "malformed"):
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class TokenClaims:
    subject: int
    issued_at: datetime
    expires_at: datetime
    email: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {
            "sub": str(self.subject),
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }
        if self.email:
            payload["email"] = self.email
        return payload

    @classmethod
    def from_payload(cls, payload: dict) -> "TokenClaims":
        try:
            subject = int(payload["sub"])
        except (TypeError, ValueError):
            raise TokenError("Invalid token subject", reason="bad_subject")
        return cls(
            subject=subject,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            email=payload.get("email"),
        )


def issue_token(
    user_id: int,
    email: Optional[str] = None,
    expires_hours: Optional[float] = None,
) -> str:
    """Create a signed token for a user. Does not touch the database."""
    now = datetime.now(timezone.utc)
    if expires_hours is None:
        expires_hours = settings.token_expire_hours
    claims = TokenClaims(
        subject=user_id,
        issued_at=now,
        expires_at=now + timedelta(hours=expires_hours),
        email=email,
    )
    return jwt.encode(
        claims.to_payload(), settings.jwt_secret, algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenClaims:
    """Verify and decode a token.

    Returns the claims on success. Raises TokenError on failure,
    including for expiry (`exp <= now`).
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired", reason="expired")
    except jwt.MissingRequiredClaimError as e:
        raise TokenError(f"Invalid token: {e}", reason="missing_claim")
    except jwt.InvalidSignatureError:
        raise TokenError("Invalid token signature", reason="bad_signature")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}", reason="malformed")
    return TokenClaims.from_payload(payload)
