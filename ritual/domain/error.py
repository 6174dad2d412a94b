"""Domain layer errors.

Domain services raise these; use cases convert them into structured
responses so they never cross the public contract as exceptions.
"""

from ritual.domain.value import ErrorCode


class DomainError(Exception):
    """Base domain error carrying a reason code."""

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code.value}: {message}")


class ValidationError(DomainError):
    """Malformed input. No state was mutated."""

    pass


class ConflictError(DomainError):
    """Request conflicts with existing state. Safe to retry, no state mutated."""

    pass


class NotReadyError(DomainError):
    """Mutation attempted before hydration finished or without a session."""

    def __init__(self, message: str = "Progress is not hydrated yet"):
        super().__init__(ErrorCode.NOT_READY, message)


class StorageQuotaExceededError(Exception):
    """Local key-value store refused a write for lack of space."""

    def __init__(self, key: str, size: int):
        self.key = key
        self.size = size
        super().__init__(f"Storage quota exceeded writing {key} ({size} bytes)")
