"""
Error taxonomy for the pricing calculator.

Every failure surfaced by a handler is one of these kinds so that callers
can tell "not found" apart from upstream or internal failures.
"""
from typing import Optional


class PricingCalculatorError(Exception):
    """Base class for all pricing calculator errors."""
    retryable: bool = False


class InvalidArgumentError(PricingCalculatorError):
    """Raised when a required field is missing or empty."""
    pass


class NotFoundError(PricingCalculatorError):
    """Raised when an estimation id has no matching aggregate."""
    pass


class PricingLookupError(PricingCalculatorError):
    """Raised when the catalog cannot resolve an instance type or flavor."""

    def __init__(
        self,
        message: str,
        instance_type: Optional[str] = None,
        flavor_name: Optional[str] = None
    ):
        super().__init__(message)
        self.instance_type = instance_type
        self.flavor_name = flavor_name


class UpstreamUnavailableError(PricingCalculatorError):
    """Raised when the catalog API call fails or returns a non-success status."""
    retryable = True


class InternalError(PricingCalculatorError):
    """Raised on unexpected failures (e.g. an undecodable catalog payload)."""
    pass
