# src/domain/errors.py

from __future__ import annotations


class DataUnavailable(RuntimeError):
    """Raised when an input source (price provider, headline file) yields nothing usable."""


class EstimationFailure(RuntimeError):
    """Raised when the volatility model cannot be fitted."""


class AlignmentDrift(RuntimeError):
    """Raised when conditional volatility is attached to rows of a different date."""

    def __init__(self, misaligned_rows: int, restricted_rows: int, estimate_rows: int) -> None:
        self.misaligned_rows = misaligned_rows
        self.restricted_rows = restricted_rows
        self.estimate_rows = estimate_rows
        super().__init__(
            f"{misaligned_rows} of {restricted_rows} rows received a volatility estimate "
            f"from a different date (estimates available: {estimate_rows})"
        )


class JoinMismatch(UserWarning):
    """Emitted when price and sentiment series share no calendar dates."""
