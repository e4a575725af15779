"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class LockTimeoutError(UtilError):
    """Raised when a lock cannot be acquired before its timeout.

    Retryable: the guarded operation has not started.
    """

    def __init__(self, key: str, timeout: float):
        self.key = key
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:g}s waiting for lock {key}")
