"""Failure injection shared by in-memory remote repositories."""

from typing import Optional


class FailureInjection:
    """Lets tests make every call fail with a chosen error.

    Set ``fail_with`` to a CapabilityError to simulate a missing table or
    policy, or to a TransientError to simulate a network failure.
    """

    def __init__(self) -> None:
        self.fail_with: Optional[Exception] = None
        self.calls = 0

    def _check(self) -> None:
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with
