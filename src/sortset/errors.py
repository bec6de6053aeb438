from __future__ import annotations


class InvalidRange(ValueError):
    """Raised when a generation interval is empty or not representable."""

    def __init__(self, min_value: int, max_value: int, reason: str | None = None):
        self.min_value = min_value
        self.max_value = max_value
        msg = reason or "maximum cannot be less than the minimum"
        super().__init__(f"invalid range [{min_value}, {max_value}]: {msg}")
