"""Request guard rejection error.

The guard itself returns GuardOutcome values. This exception exists for
callers that prefer to unwrap an outcome and let a rejection propagate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from digest_headers.domain.exceptions import DigestHeadersError

if TYPE_CHECKING:
    from digest_headers.domain.models.guard_outcome import GuardOutcome


class DigestGuardError(DigestHeadersError):
    """Raised when a rejected GuardOutcome is unwrapped.

    Attributes:
        outcome: The terminal outcome that was not VERIFIED.
    """

    def __init__(self, outcome: GuardOutcome) -> None:
        """Initialize the error.

        Args:
            outcome: The rejected guard outcome.
        """
        self.outcome = outcome
        super().__init__(f"Request rejected ({outcome.state.value}): {outcome.reason}")
