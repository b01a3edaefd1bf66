"""Domain probe for session token validation.

Session tokens are signed with a secret shared with the session service.
A burst of signature failures usually means the two sides disagree on
that secret, so it is reported separately from ordinary rejections.
Expiry is routine and logged at info.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class JWTValidatorProbe(Protocol):
    """Domain probe for session token validation."""

    def token_validated(self, user_id: str, group_id: str | None) -> None:
        """Record an accepted token and the group it acts in, if any."""
        ...

    def token_expired(self) -> None:
        ...

    def signature_rejected(self, algorithm: str) -> None:
        """Record a token whose signature does not verify with the shared secret."""
        ...

    def token_rejected(self, reason: str) -> None:
        """Record a malformed token or one with bad or missing claims."""
        ...

    def with_context(self, context: ObservationContext) -> JWTValidatorProbe:
        ...


class DefaultJWTValidatorProbe:
    """structlog implementation of JWTValidatorProbe."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultJWTValidatorProbe:
        return DefaultJWTValidatorProbe(logger=self._logger, context=context)

    def token_validated(self, user_id: str, group_id: str | None) -> None:
        self._logger.debug(
            "session_token_validated",
            user_id=user_id,
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def token_expired(self) -> None:
        self._logger.info("session_token_expired", **self._get_context_kwargs())

    def signature_rejected(self, algorithm: str) -> None:
        self._logger.error(
            "session_token_signature_rejected",
            algorithm=algorithm,
            **self._get_context_kwargs(),
        )

    def token_rejected(self, reason: str) -> None:
        self._logger.warning(
            "session_token_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )
