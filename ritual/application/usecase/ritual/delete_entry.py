"""Journal entry deletion use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.domain.error import DomainError, ValidationError
from ritual.domain.repository import JournalEntryRepository
from ritual.domain.value import ErrorCode, SyncChannel


class DeleteEntryRequest(BaseModel):
    """Delete entry request."""

    entry_id: str


class DeleteEntryUseCase:
    """Remove a journal entry. XP, streak and marks already earned stay."""

    def __init__(
        self, session: ProgressSession, journal_repository: JournalEntryRepository
    ) -> None:
        self.session = session
        self.journal_repository = journal_repository

    async def execute(self, request: DeleteEntryRequest) -> ActionResponse:
        with logfire.span("delete_entry.execute", entry_id=request.entry_id):
            try:
                identity, state = self.session.require_ready()
                remaining = [e for e in state.journal_entries if e.id != request.entry_id]
                if len(remaining) == len(state.journal_entries):
                    raise ValidationError(ErrorCode.INVALID_ENTRY, "Entry not found.")
            except DomainError as e:
                return ActionResponse.failure(e)

            state = self.session.commit(
                state.model_copy(update={"journal_entries": remaining}), backup=True
            )
            self.session.schedule(
                self.session.sync.run(
                    SyncChannel.ENTRIES,
                    "delete_entry",
                    lambda: self.journal_repository.delete(identity.id, request.entry_id),
                )
            )
            return ActionResponse(state=state)
