"""Domain exceptions for the Crowdfund Ledger.

These exceptions are framework-agnostic and represent business rule violations.
They are caught and translated to HTTP responses by the API layer's middleware.
Every one of them aborts the triggering operation with no state change.
"""


class LedgerError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "LEDGER_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Input Errors ---


class ValidationError(LedgerError):
    """Raised for non-positive goals/minimums and under-minimum contributions."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="VALIDATION_ERROR")


# --- State Errors ---


class StateError(LedgerError):
    """Raised when an operation is invalid for the campaign's state or time.

    Example: funding after the deadline, settling before it.
    """

    def __init__(self, post_id: int, message: str) -> None:
        super().__init__(message=message, code="INVALID_STATE")
        self.post_id = post_id


class InvalidStateTransitionError(StateError):
    """Raised when the state machine rejects a transition.

    Example: REFUNDED -> PAID (both are terminal).
    """

    def __init__(self, post_id: int, current_state: str, attempted_event: str) -> None:
        super().__init__(
            post_id,
            f"Invalid transition for post {post_id}: {attempted_event} from {current_state}",
        )
        self.current_state = current_state
        self.attempted_event = attempted_event


# --- Lookup Errors ---


class NotFoundError(LedgerError):
    """Raised when a post id is unknown or its campaign has been removed."""

    def __init__(self, post_id: int) -> None:
        super().__init__(
            message=f"Post not found: {post_id}",
            code="POST_NOT_FOUND",
        )
        self.post_id = post_id


class NoContributionError(LedgerError):
    """Raised when a refund is claimed by an account with a zero balance."""

    def __init__(self, post_id: int, contributor: str) -> None:
        super().__init__(
            message=f"No contribution to refund for {contributor} on post {post_id}",
            code="NO_CONTRIBUTION",
        )
        self.post_id = post_id
        self.contributor = contributor


# --- Transfer Errors ---


class TransferError(LedgerError):
    """Raised when the funds host rejects a transfer batch."""

    def __init__(self, message: str, account: str | None = None) -> None:
        super().__init__(message=message, code="TRANSFER_FAILED")
        self.account = account
