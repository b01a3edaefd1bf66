"""JWT validation for tokens issued by the external session service.

Tokens are HS256-signed with a shared secret. They identify the user and
the group the session is currently acting in. They never carry a role:
roles are resolved from the membership store on every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated JWT claims."""

    sub: str
    preferred_username: str | None
    email: str | None
    group_id: str | None


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""

    pass


class JWTValidator:
    """Validates bearer tokens signed with a shared secret.

    Validates signature and expiry, and the audience when one is configured.
    """

    def __init__(
        self,
        secret: str,
        probe: JWTValidatorProbe,
        algorithm: str = "HS256",
        audience: str = "",
        user_id_claim: str = "sub",
        username_claim: str = "preferred_username",
        email_claim: str = "email",
        group_id_claim: str = "group_id",
    ):
        """Initialize the JWT validator.

        Args:
            secret: Shared signing secret.
            probe: Observability probe for logging events.
            algorithm: Signing algorithm (default: HS256).
            audience: Expected audience claim value. Unchecked when empty.
            user_id_claim: JWT claim to use for user ID (default: sub).
            username_claim: JWT claim to use for username.
            email_claim: JWT claim to use for email.
            group_id_claim: JWT claim naming the active group.
        """
        self._secret = secret
        self._probe = probe
        self._algorithm = algorithm
        self._audience = audience
        self._user_id_claim = user_id_claim
        self._username_claim = username_claim
        self._email_claim = email_claim
        self._group_id_claim = group_id_claim

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate JWT and return claims.

        Args:
            token: The JWT token string.

        Returns:
            TokenClaims containing the validated claims.

        Raises:
            InvalidTokenError: If token is invalid, expired, or verification fails.
        """
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError as e:
            self._probe.token_rejected(reason=f"Malformed token: {e}")
            raise InvalidTokenError(f"Invalid token format: {e}") from e

        if not unverified_header:
            self._probe.token_rejected(reason="Missing token header")
            raise InvalidTokenError("Invalid token: missing header")

        try:
            claims = jwt.decode(
                token=token,
                key=self._secret,
                algorithms=[self._algorithm],
                audience=self._audience or None,
                options={
                    "verify_signature": True,
                    "verify_aud": bool(self._audience),
                    "verify_exp": True,
                    "verify_iat": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.token_expired()
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            if "audience" in str(e).lower():
                self._probe.token_rejected(reason="Invalid audience")
                raise InvalidTokenError("Invalid audience claim") from e
            self._probe.token_rejected(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            if "signature" in str(e).lower():
                self._probe.signature_rejected(algorithm=self._algorithm)
                raise InvalidTokenError("Invalid token signature") from e
            self._probe.token_rejected(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        user_id = claims.get(self._user_id_claim)
        if user_id is None:
            self._probe.token_rejected(
                reason=f"Missing {self._user_id_claim} claim"
            )
            raise InvalidTokenError(f"Missing required claim: {self._user_id_claim}")

        username = claims.get(self._username_claim)
        email = claims.get(self._email_claim)
        group_id = claims.get(self._group_id_claim)

        self._probe.token_validated(
            user_id=str(user_id),
            group_id=str(group_id) if group_id is not None else None,
        )

        return TokenClaims(
            sub=str(user_id),
            preferred_username=str(username) if username is not None else None,
            email=str(email) if email is not None else None,
            group_id=str(group_id) if group_id is not None else None,
        )
