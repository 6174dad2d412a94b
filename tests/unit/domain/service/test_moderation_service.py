"""Unit tests for BasicContentModerator."""

from ritual.domain.service import BasicContentModerator, ModerationLimits
from ritual.domain.value import ModerationCode

LIMITS = ModerationLimits(max_chars=180, max_emoji_count=6, max_emoji_ratio=0.2)


class TestModerate:
    def test_plain_text_passes(self):
        result = BasicContentModerator().moderate("A patient, luminous film.", LIMITS)

        assert result.ok
        assert result.code is None

    def test_blank_text_is_empty(self):
        result = BasicContentModerator().moderate("   \n ", LIMITS)

        assert not result.ok
        assert result.code == ModerationCode.EMPTY

    def test_length_is_measured_after_trimming(self):
        moderator = BasicContentModerator()

        assert moderator.moderate("  " + "a" * 180 + "  ", LIMITS).ok
        assert moderator.moderate("a" * 181, LIMITS).code == ModerationCode.TOO_LONG

    def test_emoji_count(self):
        text = "Loved it " + "\U0001F3AC" * 7 + " truly a great watch for everyone"

        result = BasicContentModerator().moderate(text, LIMITS)

        assert result.code == ModerationCode.TOO_MANY_EMOJI

    def test_emoji_ratio(self):
        result = BasicContentModerator().moderate("ok \U0001F3AC\U0001F3AC", LIMITS)

        assert result.code == ModerationCode.TOO_MANY_EMOJI

    def test_blocked_term_is_matched_after_folding(self):
        moderator = BasicContentModerator(blocked_terms=["kötü"])

        result = moderator.moderate("Çok KÖTÜ bir film.", LIMITS)

        assert result.code == ModerationCode.BLOCKED_LANGUAGE

    def test_blocked_term_needs_whole_word(self):
        moderator = BasicContentModerator(blocked_terms=["bad"])

        assert moderator.moderate("A badminton drama.", LIMITS).ok

    def test_blocked_phrase(self):
        moderator = BasicContentModerator(blocked_phrases=["waste of time"])

        result = moderator.moderate("Honestly a WASTE of   time!", LIMITS)

        assert result.code == ModerationCode.BLOCKED_LANGUAGE
