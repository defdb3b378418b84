from __future__ import annotations

from memorymatch.engine.actions import RestartAction, SelectCardAction
from memorymatch.engine.session import (
    GameSession,
    SessionConfig,
    new_session,
    restart,
    select,
    selectable_card_ids,
    step,
)
from memorymatch.engine.timers import TimerQueue

IMAGES = ["books", "fashion", "football", "shoes", "violin"]


def _session(images: list[str] = IMAGES, seed: int = 1, best_score: int | None = None) -> tuple[GameSession, TimerQueue]:
    timers = TimerQueue()
    session = new_session(images, scheduler=timers, seed=seed, best_score=best_score)
    return session, timers


def _pairs(session: GameSession) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for c in session.deck:
        out.setdefault(c.face_key, []).append(c.id)
    return out


def _mismatch(session: GameSession, timers: TimerQueue) -> None:
    pairs = _pairs(session)
    keys = [k for k, ids in pairs.items() if not session.find(ids[0]).matched]  # type: ignore[union-attr]
    assert select(session, pairs[keys[0]][0]).ok
    assert select(session, pairs[keys[1]][0]).ok
    timers.advance(session.config.flip_delay_ms)


def _match_all(session: GameSession) -> None:
    for a, b in _pairs(session).values():
        if session.find(a).matched:  # type: ignore[union-attr]
            continue
        assert select(session, a).ok
        assert select(session, b).ok


def test_first_selection_reveals_without_move() -> None:
    session, _ = _session()
    card = session.deck[0]
    res = select(session, card.id)
    assert res.ok
    assert card.revealed
    assert session.first is card
    assert session.second is None
    assert session.moves == 0
    assert not session.locked
    assert res.events[0]["type"] == "CARD_REVEALED"


def test_matching_pair_resolves_immediately() -> None:
    session, timers = _session()
    a, b = _pairs(session)["violin"]
    select(session, a)
    res = select(session, b)
    assert res.ok
    assert [e["type"] for e in res.events] == ["CARD_REVEALED", "PAIR_MATCHED"]
    assert session.find(a).matched and session.find(b).matched  # type: ignore[union-attr]
    assert session.find(a).revealed and session.find(b).revealed  # type: ignore[union-attr]
    assert session.matches_found == 1
    assert session.moves == 1
    assert session.first is None and session.second is None
    assert not session.locked
    assert timers.pending() == 0


def test_no_premature_match() -> None:
    session, _ = _session()
    pairs = _pairs(session)
    select(session, pairs["books"][0])
    assert not any(c.matched for c in session.deck)
    select(session, pairs["shoes"][0])
    assert not any(c.matched for c in session.deck)


def test_mismatch_stays_visible_and_locked_until_delay() -> None:
    session, timers = _session()
    pairs = _pairs(session)
    a = pairs["books"][0]
    b = pairs["shoes"][0]
    select(session, a)
    res = select(session, b)
    assert res.ok
    assert res.events[-1]["type"] == "PAIR_MISMATCHED"
    assert session.locked
    assert session.moves == 1
    # Both cards face-up during the memorization window
    assert session.find(a).revealed and session.find(b).revealed  # type: ignore[union-attr]

    timers.advance(799)
    assert session.locked
    assert session.find(a).revealed  # type: ignore[union-attr]

    timers.advance(1)
    assert not session.locked
    assert not session.find(a).revealed and not session.find(b).revealed  # type: ignore[union-attr]
    assert session.first is None and session.second is None
    # both independently selectable again
    assert select(session, a).ok
    assert select(session, pairs["books"][1]).ok
    assert session.matches_found == 1


def test_selection_rejected_while_locked() -> None:
    session, _ = _session()
    pairs = _pairs(session)
    select(session, pairs["books"][0])
    select(session, pairs["shoes"][0])
    other = pairs["violin"][0]
    res = select(session, other)
    assert not res.ok
    assert res.error == "Board is locked."
    assert not session.find(other).revealed  # type: ignore[union-attr]
    assert session.moves == 1


def test_same_card_twice_is_noop() -> None:
    session, _ = _session()
    card = session.deck[3]
    assert select(session, card.id).ok
    res = select(session, card.id)
    assert not res.ok
    assert res.error == "Card already revealed."
    assert session.first is card
    assert session.second is None
    assert session.moves == 0


def test_unknown_and_matched_cards_rejected() -> None:
    session, _ = _session()
    assert select(session, "nope").error == "Unknown card."
    a, b = _pairs(session)["football"]
    select(session, a)
    select(session, b)
    res = select(session, a)
    assert not res.ok
    assert res.error == "Card already matched."


def test_move_counting() -> None:
    session, timers = _session()
    clicks = 0
    pairs = _pairs(session)
    order = [pairs["books"][0], pairs["fashion"][0], pairs["shoes"][0], pairs["violin"][0]]
    for i, cid in enumerate(order):
        select(session, cid)
        clicks += 1
        if i % 2 == 0:
            assert session.moves == clicks // 2
        timers.advance(1000)
    assert session.moves == 2


def test_single_selection_never_counts_as_move() -> None:
    session, timers = _session()
    select(session, session.deck[0].id)
    timers.advance(10_000)
    assert session.moves == 0
    assert session.first is session.deck[0]


def test_win_and_best_score_scenario() -> None:
    session, timers = _session()
    assert session.best_score is None
    _mismatch(session, timers)
    _match_all(session)
    assert session.matches_found == 5
    assert session.moves == 6
    assert session.won
    assert session.best_score == 6
    assert any(e["type"] == "GAME_WON" for e in session.event_log)

    # A slower second round leaves the record alone
    restart(session)
    for _ in range(3):
        _mismatch(session, timers)
    _match_all(session)
    assert session.moves == 8
    assert session.won
    assert session.best_score == 6


def test_better_game_updates_best_score() -> None:
    session, timers = _session(images=["a", "b", "c", "d"], best_score=6)
    _match_all(session)
    assert session.moves == 4
    assert session.best_score == 4
    events = [e for e in session.event_log if e["type"] == "BEST_SCORE"]
    assert events == [{"type": "BEST_SCORE", "best_score": 4, "previous": 6}]


def test_restart_resets_counters_but_keeps_best_score() -> None:
    session, timers = _session(best_score=9)
    old_ids = {c.id for c in session.deck}
    _mismatch(session, timers)
    a, b = _pairs(session)["books"]
    select(session, a)
    select(session, b)
    assert session.moves == 2

    res = restart(session)
    assert res.ok
    assert session.moves == 0
    assert session.matches_found == 0
    assert not session.locked
    assert not session.won
    assert session.first is None and session.second is None
    assert len(session.deck) == 10
    assert session.best_score == 9
    assert session.generation == 1
    assert not {c.id for c in session.deck} & old_ids
    assert all(not c.matched and not c.revealed for c in session.deck)

    restart(session)
    assert session.moves == 0
    assert len(session.deck) == 10
    assert session.best_score == 9


def test_restart_during_mismatch_window_supersedes_callback() -> None:
    session, timers = _session()
    pairs = _pairs(session)
    select(session, pairs["books"][0])
    select(session, pairs["shoes"][0])
    assert session.locked
    pending = session.pending
    assert pending is not None

    restart(session)
    assert not pending.active
    # Reveal a card on the new deck before the old delay would have fired
    fresh = session.deck[0]
    select(session, fresh.id)
    log_len = len(session.event_log)

    timers.advance(5000)
    assert fresh.revealed
    assert session.first is fresh
    assert not session.locked
    assert len(session.event_log) == log_len


def test_stale_callback_is_noop_even_if_not_cancelled() -> None:
    session, timers = _session()
    pairs = _pairs(session)
    select(session, pairs["books"][0])
    select(session, pairs["shoes"][0])
    callback = session.pending.callback  # type: ignore[union-attr]

    restart(session)
    fresh = session.deck[0]
    select(session, fresh.id)
    callback()
    assert fresh.revealed
    assert session.first is fresh
    assert not any(e["type"] == "PAIR_HIDDEN" for e in session.event_log)


def test_custom_flip_delay() -> None:
    timers = TimerQueue()
    session = new_session(IMAGES, scheduler=timers, seed=3, config=SessionConfig(flip_delay_ms=2000))
    _mismatch_ids = [ids[0] for ids in list(_pairs(session).values())[:2]]
    select(session, _mismatch_ids[0])
    select(session, _mismatch_ids[1])
    timers.advance(1999)
    assert session.locked
    timers.advance(1)
    assert not session.locked


def test_step_dispatch_and_action_log() -> None:
    session, timers = _session()
    a, b = _pairs(session)["books"]
    assert step(session, SelectCardAction(card_id=a)).ok
    assert step(session, SelectCardAction(card_id=b)).ok
    assert not step(session, SelectCardAction(card_id=a)).ok
    assert step(session, RestartAction()).ok
    assert len(session.action_log) == 4
    assert session.moves == 0


def test_selectable_card_ids() -> None:
    session, timers = _session()
    pairs = _pairs(session)
    assert len(selectable_card_ids(session)) == 10
    select(session, pairs["books"][0])
    assert len(selectable_card_ids(session)) == 9
    select(session, pairs["shoes"][0])
    assert selectable_card_ids(session) == []
    timers.advance(800)
    assert len(selectable_card_ids(session)) == 10
