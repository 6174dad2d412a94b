"""Mark catalog.

Marks are permanent achievements. The catalog is static; unlock predicates
live in the mark rule engine.
"""

from ritual.domain.model.common import DomainModel
from ritual.domain.value import MarkCategory


class MarkDefinition(DomainModel):
    """Static definition of a mark."""

    id: str
    title: str
    description: str
    category: MarkCategory
    whisper: str


MARK_CATALOG: tuple[MarkDefinition, ...] = (
    # Presence
    MarkDefinition(id="first_mark", title="First Mark", description="Complete your first ritual.", category=MarkCategory.PRESENCE, whisper="It begins."),
    MarkDefinition(id="daybreaker", title="Daybreaker", description="Be present on 14 days.", category=MarkCategory.PRESENCE, whisper="Another dawn."),
    # Writing
    MarkDefinition(id="180_exact", title="The Architect", description="Write exactly 180 characters.", category=MarkCategory.WRITING, whisper="Perfectly framed."),
    MarkDefinition(id="minimalist", title="Minimalist", description="Write a ritual with < 40 characters.", category=MarkCategory.WRITING, whisper="Less said."),
    MarkDefinition(id="deep_diver", title="Deep Diver", description="Submit a long-form ritual.", category=MarkCategory.WRITING, whisper="The depths explored."),
    MarkDefinition(id="precision_loop", title="Precision Loop", description="Write exactly 180 characters three times.", category=MarkCategory.WRITING, whisper="Precision repeats."),
    # Rhythm
    MarkDefinition(id="no_rush", title="No Rush", description="Complete 10 rituals, none consecutive.", category=MarkCategory.RHYTHM, whisper="Your pace is yours."),
    MarkDefinition(id="daily_regular", title="Regular", description="Maintain a 3-day streak.", category=MarkCategory.RHYTHM, whisper="A steady pulse."),
    MarkDefinition(id="seven_quiet_days", title="Silence Keeper", description="Maintain a 7-day streak.", category=MarkCategory.RHYTHM, whisper="Seven days of silence."),
    # Discovery
    MarkDefinition(id="wide_lens", title="Wide Lens", description="Review 10 unique genres.", category=MarkCategory.DISCOVERY, whisper="A wider lens."),
    MarkDefinition(id="hidden_gem", title="Hidden Gem", description="Review a low-popularity movie.", category=MarkCategory.DISCOVERY, whisper="A private orbit."),
    MarkDefinition(id="genre_discovery", title="Spectrum", description="Review 3 unique genres.", category=MarkCategory.DISCOVERY, whisper="A spectrum revealed."),
    MarkDefinition(id="one_genre_devotion", title="Devotee", description="20 rituals in one genre.", category=MarkCategory.DISCOVERY, whisper="A singular focus."),
    MarkDefinition(id="classic_soul", title="Classic Soul", description="Watch a movie from before 1990.", category=MarkCategory.DISCOVERY, whisper="An echo from the past."),
    MarkDefinition(id="genre_nomad", title="Genre Nomad", description="Five rituals in a row, five genres.", category=MarkCategory.DISCOVERY, whisper="Always moving."),
    # Ritual
    MarkDefinition(id="watched_on_time", title="Dawn Watcher", description="Ritual between 05:00-07:00.", category=MarkCategory.RITUAL, whisper="Right on time."),
    MarkDefinition(id="held_for_five", title="The Keeper", description="5-day active streak.", category=MarkCategory.RITUAL, whisper="You held it."),
    MarkDefinition(id="mystery_solver", title="Mystery Solver", description="Unlock the Mystery Slot.", category=MarkCategory.RITUAL, whisper="The unknown revealed."),
    MarkDefinition(id="midnight_ritual", title="Midnight", description="Ritual between 00:00-01:00.", category=MarkCategory.RITUAL, whisper="The witching hour."),
    MarkDefinition(id="ritual_marathon", title="Marathon", description="Complete 20 rituals.", category=MarkCategory.RITUAL, whisper="The long run."),
    MarkDefinition(id="archive_keeper", title="Archive Keeper", description="Complete 50 rituals.", category=MarkCategory.RITUAL, whisper="The archive grows."),
    # Social
    MarkDefinition(id="first_echo", title="First Echo", description="Receive your first Echo.", category=MarkCategory.SOCIAL, whisper="Someone heard you."),
    MarkDefinition(id="echo_receiver", title="Echo Receiver", description="Receive your first Echo.", category=MarkCategory.SOCIAL, whisper="You are heard."),
    MarkDefinition(id="echo_initiate", title="Echo Initiate", description="Give 1 Echo.", category=MarkCategory.SOCIAL, whisper="A small signal."),
    MarkDefinition(id="echo_chamber", title="Echo Chamber", description="Give 10 Echoes.", category=MarkCategory.SOCIAL, whisper="The room answers."),
    MarkDefinition(id="influencer", title="Influencer", description="Receive 5 Echoes.", category=MarkCategory.SOCIAL, whisper="A wider frequency."),
    MarkDefinition(id="resonator", title="Resonator", description="Receive 5 Echoes.", category=MarkCategory.SOCIAL, whisper="Resonance established."),
    MarkDefinition(id="quiet_following", title="Quiet Following", description="Follow 5 people.", category=MarkCategory.SOCIAL, whisper="A small orbit."),
    # Legacy
    MarkDefinition(id="eternal_mark", title="Eternal", description="Reach the Eternal League.", category=MarkCategory.LEGACY, whisper="Still here."),
    MarkDefinition(id="legacy", title="The Pillar", description="Active for 30+ days.", category=MarkCategory.LEGACY, whisper="A pillar in time."),
)

MARKS_BY_ID: dict[str, MarkDefinition] = {mark.id: mark for mark in MARK_CATALOG}

DEFAULT_WHISPER = "Mark unlocked."
