from __future__ import annotations

from memorymatch.engine.score import ScoreTracker
from memorymatch.engine.serialize import snapshot, snapshot_to_dict
from memorymatch.engine.session import new_session, restart, select
from memorymatch.engine.timers import TimerQueue


def _pair_ids(session, key: str) -> list[str]:
    return [c.id for c in session.deck if c.face_key == key]


def test_tracker_mirrors_session_numbers() -> None:
    session = new_session(["a", "b"], scheduler=TimerQueue(), seed=11, best_score=7)
    tracker = ScoreTracker()
    assert tracker.moves == 0
    assert tracker.best_score is None

    tracker.observe(snapshot(session))
    assert tracker.total_pairs == 2
    assert tracker.best_score == 7


def test_deltas_follow_transitions() -> None:
    timers = TimerQueue()
    session = new_session(["a", "b"], scheduler=timers, seed=11)
    tracker = ScoreTracker(snapshot(session))
    a1, a2 = _pair_ids(session, "a")
    b1, b2 = _pair_ids(session, "b")

    select(session, a1)
    d = tracker.observe(snapshot(session))
    assert d.selection_occurred
    assert not d.pair_resolved

    select(session, b1)
    d = tracker.observe(snapshot(session))
    assert d.selection_occurred
    assert d.pair_resolved
    assert not d.pair_matched
    assert tracker.moves == 1

    timers.advance(800)
    d = tracker.observe(snapshot(session))
    assert not d.selection_occurred
    assert not d.pair_resolved

    select(session, a1)
    tracker.observe(snapshot(session))
    select(session, a2)
    d = tracker.observe(snapshot(session))
    assert d.pair_matched
    assert not d.just_won

    select(session, b1)
    tracker.observe(snapshot(session))
    select(session, b2)
    d = tracker.observe(snapshot(session))
    assert d.just_won
    assert d.best_score_changed
    assert tracker.best_score == 3
    assert tracker.won

    # Observing the same state again reports nothing new
    d = tracker.observe(snapshot(session))
    assert not d.just_won
    assert not d.best_score_changed


def test_restart_is_reported_and_keeps_best() -> None:
    session = new_session(["a"], scheduler=TimerQueue(), seed=2)
    tracker = ScoreTracker(snapshot(session))
    a1, a2 = _pair_ids(session, "a")
    select(session, a1)
    select(session, a2)
    assert tracker.observe(snapshot(session)).just_won

    restart(session)
    d = tracker.observe(snapshot(session))
    assert d.restarted
    assert not d.selection_occurred
    assert not d.best_score_changed
    assert tracker.moves == 0
    assert tracker.best_score == 1


def test_snapshot_is_detached_from_session() -> None:
    session = new_session(["a", "b"], scheduler=TimerQueue(), seed=4)
    snap = snapshot(session)
    select(session, session.deck[0].id)
    assert not snap.deck[0].revealed
    assert snapshot(session).deck[0].revealed
    assert snap.card(session.deck[0].id) is not None
    d = snapshot_to_dict(snap)
    assert d["total_pairs"] == 2
    assert len(d["deck"]) == 4  # type: ignore[arg-type]
