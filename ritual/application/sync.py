"""Per-channel remote sync state."""

from typing import Awaitable, Callable, Optional, TypeVar

import logfire

from ritual.adapter.error import CapabilityError, RemoteError, TransientError
from ritual.domain.value import SyncChannel

T = TypeVar("T")


class RemoteSync:
    """Tracks which remote channels are usable in this session.

    A capability error disables its channel for the lifetime of this object;
    the channel is never retried afterwards. Transient errors are logged and
    leave the channel enabled.
    """

    def __init__(self) -> None:
        self._disabled: dict[SyncChannel, str] = {}

    def is_enabled(self, channel: SyncChannel) -> bool:
        return channel not in self._disabled

    @property
    def disabled_channels(self) -> set[SyncChannel]:
        return set(self._disabled)

    def disable(self, channel: SyncChannel, reason: str) -> None:
        if channel in self._disabled:
            return
        self._disabled[channel] = reason
        logfire.warn("Remote channel disabled", channel=channel.value, reason=reason)

    async def call(
        self, channel: SyncChannel, action: str, fn: Callable[[], Awaitable[T]]
    ) -> T:
        """Run a remote call on a channel.

        Args:
            channel: Channel the call belongs to
            action: Name used in logs
            fn: Zero-argument coroutine factory

        Returns:
            The call's result

        Raises:
            CapabilityError: Channel is, or has just been, disabled
            TransientError: Call failed for another reason
        """
        if channel in self._disabled:
            raise CapabilityError(f"{channel.value} channel disabled: {self._disabled[channel]}")

        with logfire.span("remote_sync.call", channel=channel.value, action=action):
            try:
                return await fn()
            except CapabilityError as e:
                self.disable(channel, str(e))
                raise
            except TransientError as e:
                logfire.warn(
                    "Remote call failed", channel=channel.value, action=action, error=str(e)
                )
                raise

    async def run(
        self,
        channel: SyncChannel,
        action: str,
        fn: Callable[[], Awaitable[T]],
        default: Optional[T] = None,
    ) -> Optional[T]:
        """Like ``call`` but absorbs remote errors and returns ``default``."""
        try:
            return await self.call(channel, action, fn)
        except RemoteError:
            return default
