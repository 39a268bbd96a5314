"""Error taxonomy for the uncertainty-aware K-S comparison.

Fatal conditions are exceptions derived from ``UncertaintyKSError``; each one
carries a machine-readable ``ErrorCode`` and the name of the sample that
failed its check so the caller can diagnose which input to fix.

Advisory conditions are ``UserWarning`` subclasses emitted on the standard
warnings channel; the operation that emits them still returns a result.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable identifiers for fatal conditions."""

    INSUFFICIENT_SAMPLE_SIZE = "insufficient_sample_size"
    DUPLICATE_VALUES = "duplicate_values"
    MISSING_EXACT_DISTRIBUTION = "missing_exact_distribution"


class UncertaintyKSError(Exception):
    """Base class for fatal errors raised by the filter and the test.

    Args:
        message: Human-readable description of the failed check.
        error_code: Machine-readable error identifier.
        sample: Name of the offending sample ("x", "y"), if known.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        sample: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.sample = sample

    def to_dict(self) -> dict:
        """Serialise for API error payloads.

        Returns:
            Dict with error_code, message and sample keys.
        """
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "sample": self.sample,
        }


class InsufficientSampleSizeError(UncertaintyKSError):
    """The xenocryst filter was asked to scan a sample that is too small."""

    def __init__(self, message: str, sample: str | None = None) -> None:
        super().__init__(message, ErrorCode.INSUFFICIENT_SAMPLE_SIZE, sample)


class DuplicateValuesError(UncertaintyKSError):
    """Two observations of one sample share an identical value."""

    def __init__(self, message: str, sample: str | None = None) -> None:
        super().__init__(message, ErrorCode.DUPLICATE_VALUES, sample)


class MissingExactDistributionError(UncertaintyKSError):
    """The exact Smirnov CDF cannot be evaluated for the requested sizes."""

    def __init__(self, message: str, sample: str | None = None) -> None:
        super().__init__(message, ErrorCode.MISSING_EXACT_DISTRIBUTION, sample)


class LowSampleSizeWarning(UserWarning):
    """A test sample has so few observations that the result is weak."""


class TiedValuesWarning(UserWarning):
    """The same value occurs in both test samples."""
