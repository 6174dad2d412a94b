"""Unit tests for row mappers."""

from datetime import datetime, timezone

from ritual.domain.model import InviteRegistryEntry, JournalEntry, ProgressState
from ritual.domain.value import IdentityId
from ritual.persistence.mappers import (
    invite_to_dict,
    journal_entry_to_dict,
    progress_to_dict,
    row_to_invite,
    row_to_journal_entry,
    row_to_progress,
)


class TestProgressMapping:
    def test_missing_blob_is_empty_progress(self):
        assert row_to_progress({"xp_state": None}) == ProgressState()

    def test_blob_is_normalized(self):
        state = row_to_progress({"xp_state": {"totalXP": "120", "marks": ["first_mark", ""]}})

        assert state.total_xp == 120
        assert state.marks == ["first_mark"]

    def test_row_uses_camel_case_blob(self):
        state = ProgressState(total_xp=42, full_name="Ada Lovelace")

        row = progress_to_dict(IdentityId("user-1"), "ada@example.com", state)

        assert row["user_id"] == "user-1"
        assert row["display_name"] == "Ada Lovelace"
        assert row["xp_state"]["totalXP"] == 42

    def test_display_name_is_null_without_names(self):
        row = progress_to_dict(IdentityId("user-1"), "", ProgressState())

        assert row["display_name"] is None


class TestJournalEntryMapping:
    def test_row_round_trip(self):
        entry = JournalEntry(
            id="e1",
            date="2026-03-10",
            subject_id=7,
            subject_title="Stalker",
            text="The zone waits.",
            genre="Drama",
            rating=4.5,
            poster_ref="/p.jpg",
        )

        assert row_to_journal_entry(journal_entry_to_dict(IdentityId("user-1"), entry)) == entry

    def test_falls_back_to_created_at(self):
        entry = row_to_journal_entry(
            {"id": "e1", "created_at": datetime(2026, 3, 9, 23, 0, tzinfo=timezone.utc)}
        )

        assert entry.date == "2026-03-09"

    def test_row_without_date_is_dropped(self):
        assert row_to_journal_entry({"id": "e1", "text": "no date"}) is None

    def test_placeholder_title_from_subject_id(self):
        entry = row_to_journal_entry({"id": "e1", "entry_date": "2026-03-10", "movie_id": 42})

        assert entry.subject_title == "Film #42"


class TestInviteMapping:
    def test_row_round_trip(self):
        entry = InviteRegistryEntry(
            code="ABCD1234",
            owner_id=IdentityId("owner-1"),
            owner_email="owner@example.com",
            created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
            claim_count=2,
            last_claim_at=datetime(2026, 3, 2, tzinfo=timezone.utc),
        )

        assert row_to_invite(invite_to_dict(entry)) == entry

    def test_nullable_columns_default(self):
        entry = row_to_invite(
            {
                "code": "ABCD1234",
                "inviter_user_id": 12,
                "inviter_email": None,
                "created_at": datetime(2026, 3, 1),
                "claim_count": None,
            }
        )

        assert entry.owner_id == "12"
        assert entry.owner_email == ""
        assert entry.claim_count == 0
