"""Base use case and structured result."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel

from ritual.domain.error import DomainError
from ritual.domain.model import LevelUpEvent, MarkNotification, ProgressState
from ritual.domain.value import ErrorCode


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ActionResponse(BaseModel):
    """Outcome of a progress operation.

    Validation and conflict errors come back here with ``ok=False``; they
    are never raised past a use case.
    """

    ok: bool = True
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None
    state: Optional[ProgressState] = None
    xp_awarded: int = 0
    unlocked: list[MarkNotification] = []
    level_ups: list[LevelUpEvent] = []

    @classmethod
    def failure(cls, error: DomainError, **kwargs: Any) -> "ActionResponse":
        return cls(ok=False, error_code=error.code, message=error.message, **kwargs)
