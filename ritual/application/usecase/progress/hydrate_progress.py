"""Sign-in hydration use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse, BaseUseCase
from ritual.application.usecase.referral.claim_invite import (
    PENDING_INVITE_KEY,
    ClaimInviteRequest,
    ClaimInviteUseCase,
)
from ritual.domain.model import Identity, ProgressState, empty_progress
from ritual.domain.repository import FollowRepository, JournalEntryRepository
from ritual.domain.service import MergeService
from ritual.domain.value import ErrorCode, IdentityId, SyncChannel


class HydrateProgressRequest(BaseModel):
    """Sign-in request carrying the authenticated identity."""

    identity_id: str
    email: str = ""


class HydrateProgressResponse(ActionResponse):
    """Hydration result."""

    sources: list[str] = []
    invite_claim: Optional[ActionResponse] = None


class HydrateProgressUseCase(BaseUseCase):
    """Load and merge every progress source for a newly signed-in identity.

    Sources, lowest identity priority first: local entry backup, remote
    entries, remote follow edges, legacy local snapshot, local snapshot,
    remote profile. Unavailable remote sources are skipped. Once merged, a
    pending invite code captured before sign-in is claimed.
    """

    def __init__(
        self,
        session: ProgressSession,
        merge_service: MergeService,
        journal_repository: JournalEntryRepository,
        follow_repository: FollowRepository,
        claim_invite: ClaimInviteUseCase,
    ) -> None:
        """Initialize hydrate progress use case.

        Args:
            session: Progress session
            merge_service: State merge resolver
            journal_repository: Remote journal entries
            follow_repository: Remote follow graph
            claim_invite: Claim use case for the pending invite code
        """
        self.session = session
        self.merge_service = merge_service
        self.journal_repository = journal_repository
        self.follow_repository = follow_repository
        self.claim_invite = claim_invite

    async def execute(self, request: HydrateProgressRequest) -> HydrateProgressResponse:
        identity = Identity(id=IdentityId(request.identity_id), email=request.email)
        session = self.session
        sync = session.sync
        cache = session.local_cache

        with logfire.span("hydrate_progress.execute", identity_id=identity.id):
            generation = session.begin(identity)
            sources: list[str] = []

            local = cache.read(identity)
            legacy = cache.read_legacy(identity)
            backup = cache.read_backup(identity)

            remote_profile = await sync.run(
                SyncChannel.PROFILE,
                "find_progress",
                lambda: session.profile_repository.find_progress(identity.id),
            )
            remote_entries = await sync.run(
                SyncChannel.ENTRIES,
                "find_entries",
                lambda: self.journal_repository.find_by_identity(identity.id),
            )
            following = await sync.run(
                SyncChannel.FOLLOWS,
                "find_following",
                lambda: self.follow_repository.find_following(identity.id),
            )

            candidates: list[tuple[str, Optional[ProgressState]]] = [
                ("backup", ProgressState(journal_entries=backup) if backup else None),
                (
                    "remote_entries",
                    ProgressState(journal_entries=remote_entries) if remote_entries else None,
                ),
                ("remote_follows", ProgressState(following=following) if following else None),
                ("legacy", legacy),
                ("local", local),
                ("remote_profile", remote_profile),
            ]
            states = []
            for name, state in candidates:
                if state is not None:
                    sources.append(name)
                    states.append(state)

            merged = self.merge_service.merge(states) or empty_progress()

            follow_key = merged.username or identity.display_name
            followers = await sync.run(
                SyncChannel.FOLLOWS,
                "count_followers",
                lambda: self.follow_repository.count_followers(follow_key),
            )
            if followers is not None:
                merged = merged.model_copy(update={"followers": followers})

            if not session.complete_hydration(generation, merged):
                return HydrateProgressResponse(
                    ok=False,
                    error_code=ErrorCode.NOT_READY,
                    message="Identity changed during hydration",
                )

            logfire.info(
                "Progress hydrated",
                identity_id=identity.id,
                sources=sources,
                total_xp=merged.total_xp,
                entries=merged.entry_count,
            )

            invite_claim = None
            pending = cache.read_text(PENDING_INVITE_KEY)
            if pending:
                invite_claim = await self.claim_invite.execute(ClaimInviteRequest(code=pending))

            return HydrateProgressResponse(
                state=session.store.get(),
                sources=sources,
                invite_claim=invite_claim,
            )
