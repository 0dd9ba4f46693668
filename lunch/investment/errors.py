"""Error types for the investment module."""

PREFERENCES_UNAVAILABLE_MESSAGE = "User preferences not available"
LOAD_FAILED_PREFIX = "Failed to load investment data"


class InvalidCapacityError(ValueError):
    """Raised when a weekly capacity below zero is requested."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Weekly capacity must be >= 0, got {value}")


def load_failed_message(cause: BaseException) -> str:
    """User-facing message for a failed meal fetch."""
    return f"{LOAD_FAILED_PREFIX}: {cause}"
