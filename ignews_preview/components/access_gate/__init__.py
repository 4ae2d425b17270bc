"""
Access gate component.

Public API for the subscription redirect decision.
"""

from .component import AccessGate, decide, full_content_target, run
from .models import (
    DEFAULT_GATE_CONFIG,
    STAY,
    AccessGateConfig,
    ClaimState,
    DecideInput,
    DecideOutput,
    GateAction,
    RedirectAction,
    StayAction,
    claim_state_from_session,
)
from .ports import NavigatorPort, SessionClaimPort

__all__ = [
    # Entry points
    "AccessGate",
    "decide",
    "full_content_target",
    "run",
    # Models
    "DEFAULT_GATE_CONFIG",
    "STAY",
    "AccessGateConfig",
    "ClaimState",
    "DecideInput",
    "DecideOutput",
    "GateAction",
    "RedirectAction",
    "StayAction",
    "claim_state_from_session",
    # Ports
    "NavigatorPort",
    "SessionClaimPort",
]
