"""Remote store errors.

Remote failures fall into two kinds. A capability error means the feature is
absent or forbidden (missing table, missing function, row-level policy) and
will not heal by retrying; the channel is disabled for the session. Anything
else is transient.
"""

from typing import Optional


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class RemoteError(AdapterError):
    """Remote store call failed."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class CapabilityError(RemoteError):
    """Remote feature is absent or forbidden."""

    pass


class TransientError(RemoteError):
    """Network failure, timeout or rate limit. Safe to retry later."""

    pass


CAPABILITY_CODES = frozenset({"42P01", "42501", "42883", "42703", "PGRST205", "PGRST202"})

CAPABILITY_SIGNATURES = (
    "does not exist",
    "permission denied",
    "schema cache",
    "could not find the function",
    "row-level security",
)


def _error_code(exc: BaseException) -> Optional[str]:
    # SQLAlchemy wraps the driver error in .orig; its own .code is a docs link id
    candidates = [
        c for c in (getattr(exc, "orig", None), getattr(exc, "__cause__", None), exc) if c
    ]
    for attr in ("sqlstate", "pgcode", "code"):
        for candidate in candidates:
            if attr == "code" and candidate is exc and hasattr(exc, "orig"):
                continue
            value = getattr(candidate, attr, None)
            if isinstance(value, str) and value:
                return value
    return None


def classify_remote_error(exc: BaseException) -> RemoteError:
    """Map a raw remote exception onto CapabilityError or TransientError.

    Args:
        exc: Exception raised by a remote call

    Returns:
        Classified error (already classified errors are returned as-is)
    """
    if isinstance(exc, RemoteError):
        return exc

    code = _error_code(exc)
    message = str(exc)
    lowered = message.lower()
    if (code and code.upper() in CAPABILITY_CODES) or any(
        signature in lowered for signature in CAPABILITY_SIGNATURES
    ):
        return CapabilityError(message, code=code)
    return TransientError(message, code=code)
