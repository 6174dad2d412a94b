"""Test configuration and helpers."""

from dishka import AsyncContainer

from ritual.application.session import ProgressSession
from ritual.application.usecase.progress import (
    HydrateProgressRequest,
    HydrateProgressResponse,
    HydrateProgressUseCase,
    SignOutRequest,
    SignOutUseCase,
)
from ritual.domain.model import Identity, JournalEntry, ProgressState
from ritual.domain.service import LocalCacheService
from ritual.domain.value import IdentityId


def make_entry(
    entry_id: str,
    date: str,
    text: str = "A quiet film about waiting.",
    subject_id: int = 0,
    subject_title: str = "",
    genre: str | None = None,
) -> JournalEntry:
    """Build a journal entry for a test."""
    return JournalEntry(
        id=entry_id,
        date=date,
        subject_id=subject_id,
        subject_title=subject_title,
        text=text,
        genre=genre,
    )


def text_of_length(length: int) -> str:
    """Plain text of an exact character count."""
    base = "still frames and slow light "
    return (base * (length // len(base) + 1))[:length].rstrip().ljust(length, "x")


async def seed_local(
    env: AsyncContainer,
    state: ProgressState,
    identity_id: str = "user-1",
    email: str = "ada@example.com",
) -> Identity:
    """Write a device snapshot before the identity signs in."""
    identity = Identity(id=IdentityId(identity_id), email=email)
    cache = await env.get(LocalCacheService)
    cache.write(identity, state)
    return identity


async def sign_in(
    env: AsyncContainer, identity_id: str = "user-1", email: str = "ada@example.com"
) -> HydrateProgressResponse:
    """Hydrate a session for the identity."""
    use_case = await env.get(HydrateProgressUseCase)
    return await use_case.execute(HydrateProgressRequest(identity_id=identity_id, email=email))


async def sign_out(env: AsyncContainer) -> None:
    """Wait for remote writes, then sign out."""
    session = await env.get(ProgressSession)
    await session.flush()
    use_case = await env.get(SignOutUseCase)
    await use_case.execute(SignOutRequest())
