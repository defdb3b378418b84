from __future__ import annotations

from memorymatch.engine.timers import TimerQueue


def test_callbacks_fire_when_due_in_order() -> None:
    q = TimerQueue()
    fired: list[str] = []
    q.call_later(300, lambda: fired.append("b"))
    q.call_later(100, lambda: fired.append("a"))
    q.call_later(300, lambda: fired.append("c"))

    assert q.advance(99) == 0
    assert fired == []
    assert q.advance(1) == 1
    assert fired == ["a"]
    assert q.advance(500) == 2
    assert fired == ["a", "b", "c"]
    assert q.now == 600


def test_cancelled_callback_never_fires() -> None:
    q = TimerQueue()
    fired: list[int] = []
    handle = q.call_later(50, lambda: fired.append(1))
    assert q.pending() == 1
    handle.cancel()
    assert q.pending() == 0
    assert q.advance(1000) == 0
    assert fired == []
    assert not handle.active


def test_callback_scheduled_from_callback_runs_if_due() -> None:
    q = TimerQueue()
    fired: list[str] = []

    def first() -> None:
        fired.append("first")
        q.call_later(10, lambda: fired.append("second"))

    q.call_later(10, first)
    q.advance(15)
    assert fired == ["first"]
    q.advance(5)
    assert fired == ["first", "second"]
