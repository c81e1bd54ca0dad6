"""Domain errors."""

import math
from typing import Optional


class StreamFundError(Exception):
    """Base error for the scoring pipeline."""


class ValidationError(StreamFundError, ValueError):
    """Invalid input to a calculation."""
    
    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class SupplierError(StreamFundError):
    """Channel data could not be obtained from a supplier."""
    
    def __init__(self, channel_id: str, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"{channel_id}: {message}")
        self.channel_id = channel_id
        self.cause = cause


def require_finite(field: str, value: float) -> float:
    """Return value as float, rejecting NaN and infinities."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, f"expected a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValidationError(field, "must be finite")
    return float(value)


def require_non_negative(field: str, value: float) -> float:
    """Return value as float, rejecting negatives and non-finite numbers."""
    value = require_finite(field, value)
    if value < 0:
        raise ValidationError(field, "cannot be negative")
    return value
