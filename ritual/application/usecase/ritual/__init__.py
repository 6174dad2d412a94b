"""Journal ritual use cases."""

from .delete_entry import DeleteEntryRequest, DeleteEntryUseCase
from .submit_ritual import SubmitRitualRequest, SubmitRitualResponse, SubmitRitualUseCase

__all__ = [
    "DeleteEntryRequest",
    "DeleteEntryUseCase",
    "SubmitRitualRequest",
    "SubmitRitualResponse",
    "SubmitRitualUseCase",
]
