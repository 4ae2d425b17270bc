"""
Session claim adapter.

Implements SessionClaimPort by decoding the session provider's signed
token. Only the subscription claim is read.
"""

from __future__ import annotations

import logging
import os
from typing import Any, cast

from jose import JWTError, jwt

from ignews_preview.components.access_gate import ClaimState, claim_state_from_session

logger = logging.getLogger(__name__)


class JWTSessionClaims:
    """Reads ClaimState from an HS256 session token."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        claim_field: str = "activeSubscription",
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._claim_field = claim_field

    def decode(self, token: str) -> dict[str, Any] | None:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
            return cast(dict[str, Any], payload)
        except JWTError:
            logger.debug("Rejected session token", exc_info=True)
            return None

    def claim_state(self, token: str | None) -> ClaimState:
        """No token or an invalid token means no subscription."""
        if not token:
            return ClaimState.INACTIVE
        if token.startswith("Bearer "):
            token = token.split(" ", 1)[1]
        return claim_state_from_session(self.decode(token), self._claim_field)


def create_session_claims(
    secret_env: str = "PREVIEW_SESSION_SECRET",
    algorithm: str = "HS256",
    claim_field: str = "activeSubscription",
) -> JWTSessionClaims:
    return JWTSessionClaims(
        secret_key=os.environ.get(secret_env, "dev-secret-unsafe"),
        algorithm=algorithm,
        claim_field=claim_field,
    )
