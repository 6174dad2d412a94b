"""Unit tests for MergeService."""

import json

import pytest

from ritual.domain.model import EchoLog, ProgressState
from ritual.domain.model.progress import DEFAULT_BIO
from ritual.domain.service import MergeService, merge_progress
from tests.conftest import make_entry
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestMerge:
    """Tests for MergeService.merge."""

    @pytest.mark.asyncio
    async def test_all_missing_returns_none(self, unit_env):
        merge_service = await unit_env.get(MergeService)

        assert merge_service.merge([None, None]) is None

    @pytest.mark.asyncio
    async def test_single_source_is_kept(self, unit_env):
        merge_service = await unit_env.get(MergeService)
        state = ProgressState(total_xp=42, username="ada")

        merged = merge_service.merge([None, state])

        assert merged.total_xp == 42
        assert merged.username == "ada"


class TestMergeProgress:
    """Field-level merge rules."""

    def test_growing_counters_take_maximum(self):
        local = ProgressState(total_xp=120, echoes_given=3, followers=1)
        remote = ProgressState(total_xp=80, echoes_given=7, followers=4)

        merged = merge_progress([local, remote])

        assert merged.total_xp == 120
        assert merged.echoes_given == 7
        assert merged.followers == 4

    def test_xp_takes_maximum_while_login_date_takes_latest(self):
        local = ProgressState(total_xp=100, last_login_date="2024-01-01")
        remote = ProgressState(total_xp=80, last_login_date="2024-01-02")

        merged = merge_progress([local, remote])

        assert merged.total_xp == 100
        assert merged.last_login_date == "2024-01-02"

    def test_sets_are_unioned_and_sorted(self):
        local = ProgressState(marks=["minimalist"], active_days=["2026-03-09"])
        remote = ProgressState(marks=["first_mark", "minimalist"], active_days=["2026-03-10"])

        merged = merge_progress([local, remote])

        assert merged.marks == ["first_mark", "minimalist"]
        assert merged.active_days == ["2026-03-09", "2026-03-10"]

    def test_same_entry_from_two_sources_is_kept_once(self):
        """Entries match on date, subject and normalized text, not on id."""
        # Arrange
        local_entry = make_entry(
            "local-1", "2026-03-09", text="Slow  and tender.", subject_id=42
        )
        remote_entry = make_entry(
            "remote-9", "2026-03-09", text="slow and tender.", subject_id=42
        ).model_copy(update={"poster_ref": "/poster.jpg"})

        # Act
        merged = merge_progress(
            [
                ProgressState(journal_entries=[local_entry]),
                ProgressState(journal_entries=[remote_entry]),
            ]
        )

        # Assert
        assert len(merged.journal_entries) == 1
        assert merged.journal_entries[0].id == "local-1"
        assert merged.journal_entries[0].poster_ref == "/poster.jpg"

    def test_entries_are_sorted_newest_first(self):
        older = make_entry("a", "2026-03-01", text="first")
        newer = make_entry("b", "2026-03-05", text="second")

        merged = merge_progress(
            [ProgressState(journal_entries=[older]), ProgressState(journal_entries=[newer])]
        )

        assert [e.id for e in merged.journal_entries] == ["b", "a"]

    def test_placeholder_titles_fall_back_to_entry_id(self):
        """Two untitled entries with the same text on the same day stay distinct."""
        first = make_entry("a", "2026-03-01", text="same", subject_title="Unknown Title")
        second = make_entry("b", "2026-03-01", text="same", subject_title="Film #12")

        merged = merge_progress([ProgressState(journal_entries=[first, second])])

        assert len(merged.journal_entries) == 2

    def test_identity_fields_prefer_later_sources(self):
        local = ProgressState(username="ada_local", bio="Local bio")
        remote = ProgressState(username="ada_remote")

        merged = merge_progress([local, remote])

        assert merged.username == "ada_remote"
        # The remote bio is the default, so the customised local one survives
        assert merged.bio == "Local bio"

    def test_default_identity_values_stay_default(self):
        merged = merge_progress([ProgressState(), ProgressState()])

        assert merged.bio == DEFAULT_BIO

    def test_dated_counters_follow_latest_date(self):
        local = ProgressState(
            daily_dwell_xp=10,
            last_dwell_date="2026-03-10",
            streak=2,
            last_streak_date="2026-03-10",
        )
        remote = ProgressState(
            daily_dwell_xp=20,
            last_dwell_date="2026-03-09",
            streak=5,
            last_streak_date="2026-03-09",
        )

        merged = merge_progress([local, remote])

        assert merged.daily_dwell_xp == 10
        assert merged.last_dwell_date == "2026-03-10"
        assert merged.streak == 2
        assert merged.last_streak_date == "2026-03-10"

    def test_streak_without_date_is_dropped(self):
        merged = merge_progress([ProgressState(streak=4)])

        assert merged.streak == 0
        assert merged.last_streak_date is None

    def test_invalid_invite_codes_are_skipped(self):
        local = ProgressState(invite_code="ABCD1234")
        remote = ProgressState(invite_code="bad")

        merged = merge_progress([local, remote])

        assert merged.invite_code == "ABCD1234"

    def test_featured_marks_are_restricted_to_unlocked(self):
        local = ProgressState(marks=["first_mark"], featured_marks=["first_mark"])
        remote = ProgressState(marks=["minimalist"], featured_marks=["minimalist", "ghost"])

        merged = merge_progress([local, remote])

        assert merged.featured_marks == ["minimalist"]

    def test_referral_keys_keep_first_seen_order(self):
        local = ProgressState(referral_accepted_keys=["k1", "k2"])
        remote = ProgressState(referral_accepted_keys=["k2", "k3"])

        merged = merge_progress([local, remote])

        assert merged.referral_accepted_keys == ["k1", "k2", "k3"]

    def test_echo_history_is_deduplicated_and_capped(self):
        echoes = [EchoLog(id=f"echo-{i:02d}", date=f"2026-03-{i + 1:02d}") for i in range(12)]

        merged = merge_progress(
            [
                ProgressState(echo_history=echoes[:8]),
                ProgressState(echo_history=echoes[4:]),
            ]
        )

        assert len(merged.echo_history) == 10
        assert merged.echo_history[0].id == "echo-11"

    def test_merge_output_is_byte_identical_across_runs(self):
        # Arrange
        states = [
            ProgressState(
                total_xp=5,
                marks=["minimalist", "first_mark"],
                username="ada",
                journal_entries=[
                    make_entry("a", "2026-03-08", text="Rain on glass.", subject_id=3),
                    make_entry("b", "2026-03-09", text="Slow  and tender.", subject_id=42),
                ],
                echo_history=[EchoLog(id="echo-1", date="2026-03-08")],
                referral_accepted_keys=["k2", "k1"],
            ),
            ProgressState(
                total_xp=9,
                marks=["180_exact"],
                bio="Night owl",
                journal_entries=[
                    make_entry("c", "2026-03-09", text="slow and tender.", subject_id=42),
                    make_entry("d", "2026-03-10", text="Static hum.", genre="Drama"),
                ],
                echo_history=[
                    EchoLog(id="echo-2", date="2026-03-10"),
                    EchoLog(id="echo-1", date="2026-03-08"),
                ],
                referral_accepted_keys=["k3", "k1"],
            ),
        ]

        # Act
        first = json.dumps(merge_progress(states).to_payload())
        second = json.dumps(merge_progress(states).to_payload())

        # Assert
        assert first == second


class TestEntryDedup:
    def test_merging_a_snapshot_with_itself_matches_merging_once(self):
        """Entries that collide on fingerprint collapse the same way every time."""
        # Arrange
        snapshot = ProgressState(
            journal_entries=[
                make_entry("a", "2026-03-09", text="Slow  and tender.", subject_id=42),
                make_entry("b", "2026-03-09", text="slow and tender.", subject_id=42),
                make_entry("c", "2026-03-10", text="Static hum."),
            ]
        )

        # Act
        once = merge_progress([snapshot])
        thrice = merge_progress([snapshot, snapshot, snapshot])

        # Assert
        assert len(once.journal_entries) == 2
        assert thrice.journal_entries == once.journal_entries
