"""
Access gate component models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ClaimState(str, Enum):
    """Subscription claim as seen by the visitor's page."""

    UNKNOWN = "unknown"  # session not resolved yet
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class StayAction:
    """Keep showing the preview."""

    kind: str = "none"
    target: str | None = None


@dataclass(frozen=True)
class RedirectAction:
    """Navigate to the full article."""

    target: str
    kind: str = "redirect"


GateAction = StayAction | RedirectAction

STAY = StayAction()


@dataclass(frozen=True)
class AccessGateConfig:
    """Where subscribers are sent and how the claim is read from a session."""

    full_content_path: str = "/posts/{slug}"
    claim_field: str = "activeSubscription"


DEFAULT_GATE_CONFIG = AccessGateConfig()


# --- Input / Output ---


@dataclass(frozen=True)
class DecideInput:
    slug: str
    claim_state: ClaimState


@dataclass(frozen=True)
class DecideOutput:
    slug: str
    claim_state: ClaimState
    action: GateAction

    def to_dict(self) -> dict[str, Any]:
        return {
            "claim_state": self.claim_state.value,
            "action": self.action.kind,
            "target": self.action.target,
        }


def claim_state_from_session(
    session: Mapping[str, Any] | None,
    claim_field: str = DEFAULT_GATE_CONFIG.claim_field,
) -> ClaimState:
    """
    Reduce a session object to a ClaimState.

    Only the subscription field is read; the rest of the session is opaque.
    """
    if session and session.get(claim_field):
        return ClaimState.ACTIVE
    return ClaimState.INACTIVE
