"""Application layer DI providers."""

from dishka import Scope, provide

from ritual.application.clock import Clock
from ritual.application.registry import InviteRegistry
from ritual.application.session import ProgressSession
from ritual.application.store import ProgressStateStore
from ritual.application.sync import RemoteSync
from ritual.application.usecase.progress import (
    AcknowledgeLevelUpUseCase,
    AwardDwellUseCase,
    AwardXPUseCase,
    ClaimShareRewardUseCase,
    GetProgressUseCase,
    HydrateProgressUseCase,
    RegisterPresenceUseCase,
    SignOutUseCase,
)
from ritual.application.usecase.referral import (
    CapturePendingInviteUseCase,
    ClaimInviteUseCase,
    EnsureInviteCodeUseCase,
)
from ritual.application.usecase.ritual import DeleteEntryUseCase, SubmitRitualUseCase
from ritual.application.usecase.social import (
    EchoRitualUseCase,
    ReceiveEchoUseCase,
    ToggleFeaturedMarkUseCase,
    ToggleFollowUseCase,
    UnlockMarkUseCase,
    UpdateIdentityUseCase,
)
from ritual.config import ProgressSettings, ReferralSettings
from ritual.domain.repository import (
    FollowRepository,
    InviteRegistryRepository,
    JournalEntryRepository,
    ProfileRepository,
)
from ritual.domain.service import (
    ContentModerator,
    LocalCacheService,
    MarkService,
    MergeService,
    ReferralService,
    StreakService,
    XPService,
)
from ritual.persistence.repository import LocalInviteRegistryRepository
from ritual.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed.

    The session and its collaborators are APP-scoped: one progress session
    per device. Use cases are REQUEST-scoped and share that session.
    """

    # Session engine
    @provide(scope=Scope.APP)
    def get_state_store(self) -> ProgressStateStore:
        """Provide the observable progress state holder."""
        return ProgressStateStore()

    @provide(scope=Scope.APP)
    def get_remote_sync(self) -> RemoteSync:
        """Provide per-channel remote sync state."""
        return RemoteSync()

    @provide(scope=Scope.APP)
    def get_progress_session(
        self,
        store: ProgressStateStore,
        local_cache: LocalCacheService,
        profile_repository: ProfileRepository,
        sync: RemoteSync,
        clock: Clock,
    ) -> ProgressSession:
        """Provide the device progress session."""
        return ProgressSession(
            store=store,
            local_cache=local_cache,
            profile_repository=profile_repository,
            sync=sync,
            clock=clock,
        )

    @provide(scope=Scope.APP)
    def get_local_invite_registry(
        self, local_cache: LocalCacheService
    ) -> LocalInviteRegistryRepository:
        """Provide the device-local invite registry."""
        return LocalInviteRegistryRepository(cache=local_cache)

    @provide(scope=Scope.APP)
    def get_invite_registry(
        self,
        remote: InviteRegistryRepository,
        local: LocalInviteRegistryRepository,
        sync: RemoteSync,
    ) -> InviteRegistry:
        """Provide the invite registry with local fallback."""
        return InviteRegistry(remote=remote, local=local, sync=sync)

    # Progress use cases
    @provide(scope=Scope.REQUEST)
    def get_hydrate_progress_use_case(
        self,
        session: ProgressSession,
        merge_service: MergeService,
        journal_repository: JournalEntryRepository,
        follow_repository: FollowRepository,
        claim_invite: ClaimInviteUseCase,
    ) -> HydrateProgressUseCase:
        """Provide hydrate progress use case."""
        return HydrateProgressUseCase(
            session=session,
            merge_service=merge_service,
            journal_repository=journal_repository,
            follow_repository=follow_repository,
            claim_invite=claim_invite,
        )

    @provide(scope=Scope.REQUEST)
    def get_sign_out_use_case(self, session: ProgressSession) -> SignOutUseCase:
        """Provide sign out use case."""
        return SignOutUseCase(session=session)

    @provide(scope=Scope.REQUEST)
    def get_get_progress_use_case(
        self, session: ProgressSession, xp_service: XPService
    ) -> GetProgressUseCase:
        """Provide get progress use case."""
        return GetProgressUseCase(session=session, xp_service=xp_service)

    @provide(scope=Scope.REQUEST)
    def get_award_xp_use_case(
        self, session: ProgressSession, xp_service: XPService
    ) -> AwardXPUseCase:
        """Provide award XP use case."""
        return AwardXPUseCase(session=session, xp_service=xp_service)

    @provide(scope=Scope.REQUEST)
    def get_register_presence_use_case(
        self,
        session: ProgressSession,
        xp_service: XPService,
        streak_service: StreakService,
        mark_service: MarkService,
        progress_settings: ProgressSettings,
    ) -> RegisterPresenceUseCase:
        """Provide register presence use case."""
        return RegisterPresenceUseCase(
            session=session,
            xp_service=xp_service,
            streak_service=streak_service,
            mark_service=mark_service,
            progress_settings=progress_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_award_dwell_use_case(
        self,
        session: ProgressSession,
        xp_service: XPService,
        progress_settings: ProgressSettings,
    ) -> AwardDwellUseCase:
        """Provide award dwell use case."""
        return AwardDwellUseCase(
            session=session, xp_service=xp_service, progress_settings=progress_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_claim_share_reward_use_case(
        self,
        session: ProgressSession,
        xp_service: XPService,
        progress_settings: ProgressSettings,
    ) -> ClaimShareRewardUseCase:
        """Provide claim share reward use case."""
        return ClaimShareRewardUseCase(
            session=session, xp_service=xp_service, progress_settings=progress_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_acknowledge_level_up_use_case(
        self, session: ProgressSession
    ) -> AcknowledgeLevelUpUseCase:
        """Provide acknowledge level-up use case."""
        return AcknowledgeLevelUpUseCase(session=session)

    # Ritual use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_ritual_use_case(
        self,
        session: ProgressSession,
        moderator: ContentModerator,
        xp_service: XPService,
        streak_service: StreakService,
        mark_service: MarkService,
        journal_repository: JournalEntryRepository,
        progress_settings: ProgressSettings,
    ) -> SubmitRitualUseCase:
        """Provide submit ritual use case."""
        return SubmitRitualUseCase(
            session=session,
            moderator=moderator,
            xp_service=xp_service,
            streak_service=streak_service,
            mark_service=mark_service,
            journal_repository=journal_repository,
            progress_settings=progress_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_entry_use_case(
        self, session: ProgressSession, journal_repository: JournalEntryRepository
    ) -> DeleteEntryUseCase:
        """Provide delete entry use case."""
        return DeleteEntryUseCase(session=session, journal_repository=journal_repository)

    # Social use cases
    @provide(scope=Scope.REQUEST)
    def get_echo_ritual_use_case(
        self,
        session: ProgressSession,
        xp_service: XPService,
        mark_service: MarkService,
        progress_settings: ProgressSettings,
    ) -> EchoRitualUseCase:
        """Provide echo ritual use case."""
        return EchoRitualUseCase(
            session=session,
            xp_service=xp_service,
            mark_service=mark_service,
            progress_settings=progress_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_receive_echo_use_case(
        self,
        session: ProgressSession,
        xp_service: XPService,
        mark_service: MarkService,
        progress_settings: ProgressSettings,
    ) -> ReceiveEchoUseCase:
        """Provide receive echo use case."""
        return ReceiveEchoUseCase(
            session=session,
            xp_service=xp_service,
            mark_service=mark_service,
            progress_settings=progress_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_follow_use_case(
        self,
        session: ProgressSession,
        mark_service: MarkService,
        follow_repository: FollowRepository,
    ) -> ToggleFollowUseCase:
        """Provide toggle follow use case."""
        return ToggleFollowUseCase(
            session=session, mark_service=mark_service, follow_repository=follow_repository
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_featured_mark_use_case(
        self, session: ProgressSession
    ) -> ToggleFeaturedMarkUseCase:
        """Provide toggle featured mark use case."""
        return ToggleFeaturedMarkUseCase(session=session)

    @provide(scope=Scope.REQUEST)
    def get_unlock_mark_use_case(
        self, session: ProgressSession, mark_service: MarkService
    ) -> UnlockMarkUseCase:
        """Provide unlock mark use case."""
        return UnlockMarkUseCase(session=session, mark_service=mark_service)

    @provide(scope=Scope.REQUEST)
    def get_update_identity_use_case(
        self, session: ProgressSession, progress_settings: ProgressSettings
    ) -> UpdateIdentityUseCase:
        """Provide update identity use case."""
        return UpdateIdentityUseCase(session=session, progress_settings=progress_settings)

    # Referral use cases
    @provide(scope=Scope.REQUEST)
    def get_claim_invite_use_case(
        self,
        session: ProgressSession,
        referral_service: ReferralService,
        xp_service: XPService,
        registry: InviteRegistry,
        referral_settings: ReferralSettings,
    ) -> ClaimInviteUseCase:
        """Provide claim invite use case."""
        return ClaimInviteUseCase(
            session=session,
            referral_service=referral_service,
            xp_service=xp_service,
            registry=registry,
            referral_settings=referral_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_ensure_invite_code_use_case(
        self,
        session: ProgressSession,
        referral_service: ReferralService,
        registry: InviteRegistry,
    ) -> EnsureInviteCodeUseCase:
        """Provide ensure invite code use case."""
        return EnsureInviteCodeUseCase(
            session=session, referral_service=referral_service, registry=registry
        )

    @provide(scope=Scope.REQUEST)
    def get_capture_pending_invite_use_case(
        self, session: ProgressSession, claim_invite: ClaimInviteUseCase
    ) -> CapturePendingInviteUseCase:
        """Provide capture pending invite use case."""
        return CapturePendingInviteUseCase(session=session, claim_invite=claim_invite)
