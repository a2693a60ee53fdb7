"""Campaign State Machine Guard.

Uses python-statemachine to enforce legal state transitions at the domain level.
No matter what the API or the settlement engine does, an illegal transition
(e.g., PAID -> REFUNDED) raises TransitionNotAllowed.

The machine is instantiated per-operation from the stored status and validates
a transition before the campaign's status field is updated.

Transition table:
    ACTIVE  -> ACTIVE    (contribution_recorded)
    ACTIVE  -> ACTIVE    (refund_claimed)
    ACTIVE  -> PAID      (goal_reached)
    ACTIVE  -> REFUNDED  (refunds_completed)

PAID and REFUNDED are final: the campaign is removed in the same operation
that reaches them. The "refundable" phase of an ACTIVE campaign depends on the
clock and is derived, not stored (see PostPhase).
"""

from __future__ import annotations

from statemachine import State, StateMachine


class PostStateMachine(StateMachine):
    """State machine that guards the campaign lifecycle.

    Usage:
        sm = PostStateMachine(current_status="ACTIVE")
        sm.goal_reached()  # transitions to PAID
        sm.status          # "PAID"
    """

    # --- States ---
    ACTIVE = State("ACTIVE", initial=True)
    PAID = State("PAID", final=True)
    REFUNDED = State("REFUNDED", final=True)

    # --- Events / Transitions ---

    # Accounting changes that keep the campaign open
    contribution_recorded = ACTIVE.to.itself()
    refund_claimed = ACTIVE.to.itself()

    # Settlement
    goal_reached = ACTIVE.to(PAID)
    refunds_completed = ACTIVE.to(REFUNDED)

    def __init__(self, current_status: str = "ACTIVE") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: The current PostStatus value (e.g., "ACTIVE").
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches PostStatus enum)."""
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        """Return a list of event names that can fire from the current state."""
        return [event.id for event in self.allowed_events]


def validate_transition(current_status: str, event_name: str) -> str:
    """Validate a state transition and return the new status.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is invalid.
    """
    sm = PostStateMachine(current_status=current_status)

    event_method = getattr(sm, event_name, None)
    if event_method is None or not callable(event_method):
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {current_status}: {sm.get_allowed_events()}"
        )

    event_method()
    return sm.status
