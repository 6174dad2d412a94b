"""Unit tests for the progress state store and level-up queue."""

from ritual.application.store import LevelUpQueue, ProgressStateStore
from ritual.domain.model import LEAGUES, LevelUpEvent, ProgressState


class TestProgressStateStore:
    def test_starts_empty(self):
        assert ProgressStateStore().get() == ProgressState()

    def test_listeners_see_every_set_until_unsubscribed(self):
        store = ProgressStateStore()
        seen: list[int] = []
        unsubscribe = store.subscribe(lambda state: seen.append(state.total_xp))

        store.set(ProgressState(total_xp=5))
        unsubscribe()
        store.set(ProgressState(total_xp=9))
        unsubscribe()

        assert seen == [5]
        assert store.get().total_xp == 9


class TestLevelUpQueue:
    def test_events_are_shown_one_at_a_time_in_order(self):
        queue = LevelUpQueue()
        silver = LevelUpEvent(league=LEAGUES[1], total_xp=1020)
        gold = LevelUpEvent(league=LEAGUES[2], total_xp=1020)

        queue.push([silver, gold])

        assert queue.current == silver
        assert queue.acknowledge() == gold
        assert queue.acknowledge() is None
        assert queue.acknowledge() is None
        assert len(queue) == 0
