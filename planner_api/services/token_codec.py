### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - Token Codec -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Token Codec

Issues and verifies signed, time-limited bearer credentials (JWT, HS256).

Claims:
- sub: user id
- email, organization_id, tenant_id
- token_version: must match the user's stored version to stay valid
- iat / exp: issue and expiry timestamps

Rotating the secret invalidates every outstanding credential.
"""

from datetime import datetime, timedelta, timezone

import jwt

from planner_api.context import TokenPayload
from planner_api.errors import (
    CredentialExpired,
    MalformedCredential,
    SignatureInvalid,
)

REQUIRED_CLAIMS = ["sub", "email", "organization_id", "tenant_id", "token_version", "exp"]


class TokenCodec:
    """
    Sign and verify credentials with a process-wide secret.

    Args:
        secret_key: HMAC signing secret
        algorithm: JWT algorithm (default HS256)
        expiry_seconds: Default credential lifetime (default 1 hour)
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expiry_seconds: int = 3600):
        if not secret_key:
            raise ValueError("Token signing secret must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    def issue(
        self,
        user_id: str,
        email: str,
        organization_id: str,
        tenant_id: str,
        token_version: int,
        expires_in: int | None = None,
    ) -> str:
        """Create a signed credential"""
        now = datetime.now(timezone.utc)
        lifetime = self.expiry_seconds if expires_in is None else expires_in
        token_data = {
            "sub": user_id,
            "email": email,
            "organization_id": organization_id,
            "tenant_id": tenant_id,
            "token_version": int(token_version),
            "iat": now,
            "exp": now + timedelta(seconds=lifetime),
        }
        return jwt.encode(token_data, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        """
        Validate signature and expiry, returning the decoded payload.

        Raises:
            CredentialExpired: signature valid but the token is past its expiry
            SignatureInvalid: token was not signed with our secret
            MalformedCredential: not a JWT, or required claims are missing
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise CredentialExpired() from e
        except jwt.InvalidSignatureError as e:
            raise SignatureInvalid() from e
        except jwt.InvalidTokenError as e:
            # DecodeError, MissingRequiredClaimError, bad algorithm, ...
            raise MalformedCredential() from e

        try:
            return TokenPayload(
                user_id=str(payload["sub"]),
                email=str(payload["email"]),
                organization_id=str(payload["organization_id"]),
                tenant_id=str(payload["tenant_id"]),
                token_version=int(payload["token_version"]),
                issued_at=_from_timestamp(payload.get("iat")),
                expires_at=_from_timestamp(payload["exp"]),
            )
        except (TypeError, ValueError) as e:
            raise MalformedCredential() from e

    def remaining_seconds(self, payload: TokenPayload) -> int:
        """Seconds until the credential expires (0 if already expired)"""
        if payload.expires_at is None:
            return 0
        delta = payload.expires_at - datetime.now(timezone.utc)
        return max(0, int(delta.total_seconds()))


def _from_timestamp(value) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
