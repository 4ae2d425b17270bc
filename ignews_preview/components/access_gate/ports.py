"""
Access gate component ports.
"""

from __future__ import annotations

from typing import Protocol

from .models import ClaimState


class NavigatorPort(Protocol):
    """Fire-and-forget navigation in the visitor's page."""

    def push(self, target: str) -> None:
        ...


class SessionClaimPort(Protocol):
    """
    Port for reading the subscription claim of a session.

    Implementations:
    - JWTSessionClaims: decodes the session provider's token
    """

    def claim_state(self, token: str | None) -> ClaimState:
        """Return the claim state for a session token (None means no session)."""
        ...
