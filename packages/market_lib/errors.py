# packages/market_lib/errors.py

"""
Error taxonomy for the dashboard core.

None of these are fatal: each one degrades a single panel or list to an
empty/neutral state while the rest of the service keeps running.
"""


class MarketError(Exception):
    """Base class for all domain errors raised by the dashboard core."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class DataUnavailable(MarketError):
    """A remote fetch failed, timed out, or returned nothing usable."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        message = f"Market data unavailable for {source}"
        if reason:
            message += f": {reason}"
        super().__init__(message, code="DATA_UNAVAILABLE")
        self.source = source
        self.reason = reason


class InsufficientData(MarketError):
    """Fewer samples than a line fit needs."""

    def __init__(self, sample_count: int, required: int = 2) -> None:
        super().__init__(
            f"Need at least {required} price samples to fit a trend, got {sample_count}",
            code="INSUFFICIENT_DATA",
        )
        self.sample_count = sample_count
        self.required = required


class PersistedStateCorrupt(MarketError):
    """A persisted slot exists but cannot be decoded into the expected shape."""

    def __init__(self, slot: str, reason: str) -> None:
        super().__init__(
            f"Persisted slot '{slot}' is corrupt: {reason}",
            code="PERSISTED_STATE_CORRUPT",
        )
        self.slot = slot
        self.reason = reason
