"""Progress session engine.

The session is the single owner of the canonical ProgressState for the
signed-in identity. Every mutation commits synchronously (store and local
cache) before any await; remote writes run afterwards as tracked background
tasks whose failures never undo the local commit.
"""

import asyncio
from typing import Any, Coroutine, Iterable, Optional

import logfire

from ritual.application.clock import Clock
from ritual.application.store import LevelUpQueue, ProgressStateStore
from ritual.application.sync import RemoteSync
from ritual.domain.error import NotReadyError
from ritual.domain.model import Identity, LevelUpEvent, ProgressState, empty_progress
from ritual.domain.repository import ProfileRepository
from ritual.domain.service import LocalCacheService
from ritual.domain.value import SyncChannel


class ProgressSession:
    """Session state for one device.

    Holds the identity, the hydration flag, the level-up queue, the set of
    in-flight referral claims and the background remote tasks.
    """

    def __init__(
        self,
        store: ProgressStateStore,
        local_cache: LocalCacheService,
        profile_repository: ProfileRepository,
        sync: RemoteSync,
        clock: Clock,
    ) -> None:
        """Initialize session.

        Args:
            store: Observable state holder
            local_cache: Device-local cache
            profile_repository: Remote profile store
            sync: Remote channel state
            clock: Local wall clock
        """
        self.store = store
        self.local_cache = local_cache
        self.profile_repository = profile_repository
        self.sync = sync
        self.clock = clock

        self.identity: Optional[Identity] = None
        self.hydrated = False
        self.generation = 0
        self.level_ups = LevelUpQueue()
        self.claims_in_flight: set[tuple[str, str]] = set()

        self._tasks: set[asyncio.Task] = set()
        self._upload_pending = False

    # Lifecycle ----------------------------------------------------------
    def begin(self, identity: Identity) -> int:
        """Start hydrating a new identity.

        Returns:
            Generation token; hydration results for older tokens are dropped
        """
        self.generation += 1
        self.identity = identity
        self.hydrated = False
        self.level_ups.clear()
        self.claims_in_flight.clear()
        self.store.set(empty_progress())
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation and self.identity is not None

    def complete_hydration(self, generation: int, state: ProgressState) -> bool:
        """Install the merged snapshot if the identity is still current."""
        if not self.is_current(generation):
            logfire.info("Dropping stale hydration result", generation=generation)
            return False
        self.hydrated = True
        self.commit(state, backup=True)
        return True

    def reset(self) -> None:
        """Sign out: drop the identity and replace state with an empty one."""
        self.generation += 1
        self.identity = None
        self.hydrated = False
        self.level_ups.clear()
        self.claims_in_flight.clear()
        self._upload_pending = False
        self.store.set(empty_progress())

    # Mutation -----------------------------------------------------------
    def require_ready(self) -> tuple[Identity, ProgressState]:
        """Identity and state for a mutation.

        Raises:
            NotReadyError: No identity, or hydration has not finished
        """
        if self.identity is None or not self.hydrated:
            raise NotReadyError()
        return self.identity, self.store.get()

    def commit(
        self,
        state: ProgressState,
        level_ups: Iterable[LevelUpEvent] = (),
        backup: bool = False,
        upload: bool = True,
    ) -> ProgressState:
        """Apply a state transition locally, then schedule the profile upload.

        Args:
            state: New canonical state
            level_ups: League crossings produced by the transition
            backup: Also rewrite the journal entry backup
            upload: Schedule a remote profile upload

        Returns:
            The committed state
        """
        identity = self.identity
        if identity is None:
            raise NotReadyError("No signed-in identity")

        self.local_cache.write(identity, state)
        if backup:
            self.local_cache.write_backup(identity, state.journal_entries)
        self.store.set(state)
        self.level_ups.push(level_ups)

        if upload:
            self._schedule_upload(identity, state)
        return state

    def _schedule_upload(self, identity: Identity, state: ProgressState) -> None:
        if not self.sync.is_enabled(SyncChannel.PROFILE) or self._upload_pending:
            return
        self._upload_pending = True
        self.schedule(self._upload_profile(identity, state, self.generation))

    async def _upload_profile(
        self, identity: Identity, fallback: ProgressState, generation: int
    ) -> None:
        # Coalesced: upload whatever is current when the task runs
        self._upload_pending = False
        state = self.store.get() if self.is_current(generation) else fallback
        await self.sync.run(
            SyncChannel.PROFILE,
            "save_progress",
            lambda: self.profile_repository.save_progress(identity.id, identity.email, state),
        )

    # Background tasks ---------------------------------------------------
    def schedule(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run a remote write in the background and keep track of it."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logfire.error("Background remote task failed", error=repr(error))

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def flush(self) -> None:
        """Wait for every scheduled remote write, including ones they schedule."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
