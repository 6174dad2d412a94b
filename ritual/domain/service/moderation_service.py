"""Content moderation collaborator.

The engine only needs the ``ContentModerator`` contract. The basic moderator
checks length and emoji density and accepts an injected blocked-term set;
no wordlist ships with the package.
"""

import re
import unicodedata
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ritual.domain.model.common import DomainModel
from ritual.domain.value import ModerationCode

# Pictographic code point ranges
_EMOJI = re.compile(
    "["
    "\U0001F000-\U0001FAFF"
    "\U00002600-\U000027BF"
    "\U00002B00-\U00002BFF"
    "\U00002300-\U000023FF"
    "\U00002190-\U000021FF"
    "©®‼⁉™ℹ〰〽㊗㊙"
    "]"
)

_TURKISH_FOLD = str.maketrans("ıİğĞşŞçÇöÖüÜ", "iIgGsScCoOuU")


class ModerationLimits(DomainModel):
    """Limits applied by the moderator."""

    max_chars: int = 180
    max_emoji_count: int = 6
    max_emoji_ratio: float = 0.2


class ModerationResult(DomainModel):
    """Moderation verdict."""

    ok: bool
    code: Optional[ModerationCode] = None
    message: Optional[str] = None


class ContentModerator(ABC):
    """Decides whether user text may be stored."""

    @abstractmethod
    def moderate(self, text: str, limits: ModerationLimits) -> ModerationResult:
        """Moderate text.

        Args:
            text: Raw user text
            limits: Length and emoji limits

        Returns:
            ModerationResult; any non-ok result is a hard rejection
        """
        pass


def normalize_for_moderation(text: str) -> str:
    lowered = text.translate(_TURKISH_FOLD).lower()
    stripped = "".join(
        ch for ch in unicodedata.normalize("NFD", lowered) if not unicodedata.combining(ch)
    )
    return re.sub(r"\s+", " ", re.sub(r"[^a-z0-9\s]", " ", stripped)).strip()


def count_emoji(text: str) -> int:
    return len(_EMOJI.findall(text))


def count_visible_chars(text: str) -> int:
    return sum(1 for ch in text if not ch.isspace())


class BasicContentModerator(ContentModerator):
    """Length, emoji and blocked-term checks."""

    def __init__(
        self,
        blocked_terms: Iterable[str] = (),
        blocked_phrases: Iterable[str] = (),
    ) -> None:
        self.blocked_terms = frozenset(normalize_for_moderation(t) for t in blocked_terms)
        self.blocked_phrases = tuple(normalize_for_moderation(p) for p in blocked_phrases)

    def moderate(self, text: str, limits: ModerationLimits) -> ModerationResult:
        trimmed = (text or "").strip()
        if not trimmed:
            return ModerationResult(
                ok=False, code=ModerationCode.EMPTY, message="Text cannot be empty."
            )

        if len(trimmed) > limits.max_chars:
            return ModerationResult(
                ok=False,
                code=ModerationCode.TOO_LONG,
                message=f"Text can be at most {limits.max_chars} characters.",
            )

        emoji = count_emoji(trimmed)
        visible = count_visible_chars(trimmed)
        ratio = emoji / visible if visible else 0.0
        if emoji > limits.max_emoji_count or ratio > limits.max_emoji_ratio:
            return ModerationResult(
                ok=False,
                code=ModerationCode.TOO_MANY_EMOJI,
                message="Too many emoji. Please write with fewer.",
            )

        if self._has_blocked_language(trimmed):
            return ModerationResult(
                ok=False,
                code=ModerationCode.BLOCKED_LANGUAGE,
                message="Blocked language detected. Please revise.",
            )

        return ModerationResult(ok=True)

    def _has_blocked_language(self, text: str) -> bool:
        normalized = normalize_for_moderation(text)
        if not normalized:
            return False
        if any(phrase and phrase in normalized for phrase in self.blocked_phrases):
            return True
        return any(token in self.blocked_terms for token in normalized.split(" "))
