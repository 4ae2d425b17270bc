"""
Access gate component.

Decides whether a visitor stays on the preview or is sent to the full
article. The decision is a pure function of the claim state; the
AccessGate class applies it each time the session provider reports a
change.

Invariants:
- Redirect if and only if the claim is ACTIVE
- UNKNOWN never redirects
- One navigation per claim-change event, no retry on failure
"""

from __future__ import annotations

import logging

from .models import (
    DEFAULT_GATE_CONFIG,
    STAY,
    AccessGateConfig,
    ClaimState,
    DecideInput,
    DecideOutput,
    GateAction,
    RedirectAction,
)
from .ports import NavigatorPort

logger = logging.getLogger(__name__)


def full_content_target(slug: str, config: AccessGateConfig = DEFAULT_GATE_CONFIG) -> str:
    """Route of the full article for a slug."""
    return config.full_content_path.format(slug=slug)


def decide(
    claim_state: ClaimState,
    slug: str,
    config: AccessGateConfig = DEFAULT_GATE_CONFIG,
) -> GateAction:
    """Map a claim state to the action the page should take."""
    if claim_state is ClaimState.ACTIVE:
        return RedirectAction(target=full_content_target(slug, config))
    return STAY


class AccessGate:
    """
    Per-page gate driven by claim-change events.

    The hosting page calls on_claim_change whenever the session resolves or
    updates.
    """

    def __init__(
        self,
        slug: str,
        navigator: NavigatorPort,
        config: AccessGateConfig | None = None,
    ) -> None:
        self._slug = slug
        self._navigator = navigator
        self._config = config or DEFAULT_GATE_CONFIG
        self._state = ClaimState.UNKNOWN

    @property
    def state(self) -> ClaimState:
        return self._state

    def on_claim_change(self, claim_state: ClaimState) -> GateAction:
        """Record the new claim state and navigate if it grants access."""
        self._state = claim_state
        action = decide(claim_state, self._slug, self._config)

        if isinstance(action, RedirectAction):
            try:
                self._navigator.push(action.target)
            except Exception:
                # Navigation is fire-and-forget; the visitor stays on the preview.
                logger.warning("Navigation to %s failed", action.target, exc_info=True)

        return action


# --- Component Entry Point ---


def run(
    inp: DecideInput,
    *,
    config: AccessGateConfig | None = None,
) -> DecideOutput:
    """Decide the gate action for a slug and claim state."""
    config = config or DEFAULT_GATE_CONFIG
    return DecideOutput(
        slug=inp.slug,
        claim_state=inp.claim_state,
        action=decide(inp.claim_state, inp.slug, config),
    )
