from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .actions import Action, RestartAction, SelectCardAction
from .deck import generate
from .timers import Scheduler, TimerHandle, TimerQueue
from .types import Card, Event


@dataclass(frozen=True)
class SessionConfig:
    flip_delay_ms: float = 800.0


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class GameSession:
    images: tuple[str, ...]
    config: SessionConfig
    scheduler: Scheduler
    rng: random.Random
    deck: list[Card]
    seed: int | None = None
    first: Card | None = None
    second: Card | None = None
    locked: bool = False
    moves: int = 0
    matches_found: int = 0
    best_score: int | None = None
    won: bool = False
    generation: int = 0
    pending: TimerHandle | None = None
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def total_pairs(self) -> int:
        return len(self.images)

    def find(self, card_id: str) -> Card | None:
        for card in self.deck:
            if card.id == card_id:
                return card
        return None


def _clear_selection(session: GameSession) -> None:
    session.first = None
    session.second = None
    session.locked = False


def _check_won(session: GameSession) -> None:
    if session.won or session.matches_found < session.total_pairs:
        return
    session.won = True
    session.event_log.append({"type": "GAME_WON", "moves": session.moves, "generation": session.generation})
    if session.best_score is None or session.moves < session.best_score:
        previous = session.best_score
        session.best_score = session.moves
        session.event_log.append({"type": "BEST_SCORE", "best_score": session.moves, "previous": previous})


def _hide_mismatch(session: GameSession, generation: int, first: Card, second: Card) -> None:
    # Scheduled against an older deck: nothing to do.
    if generation != session.generation:
        return
    session.pending = None
    first.revealed = False
    second.revealed = False
    session.event_log.append({"type": "PAIR_HIDDEN", "card_ids": [first.id, second.id]})
    _clear_selection(session)
    _check_won(session)


def _resolve(session: GameSession) -> None:
    first = session.first
    second = session.second
    assert first is not None and second is not None
    session.locked = True
    session.moves += 1

    if first.face_key == second.face_key:
        first.matched = True
        second.matched = True
        session.matches_found += 1
        session.event_log.append(
            {"type": "PAIR_MATCHED", "face_key": first.face_key, "card_ids": [first.id, second.id]}
        )
        _clear_selection(session)
        _check_won(session)
        return

    session.event_log.append(
        {
            "type": "PAIR_MISMATCHED",
            "card_ids": [first.id, second.id],
            "delay_ms": session.config.flip_delay_ms,
        }
    )
    generation = session.generation
    session.pending = session.scheduler.call_later(
        session.config.flip_delay_ms,
        lambda: _hide_mismatch(session, generation, first, second),
    )


def select(session: GameSession, card_id: str) -> StepResult:
    """Reveal a card and, if it completes a pair, resolve the pair.

    Rejections are ordinary outcomes (fast double clicks, clicks during the
    memorization window) and come back as `ok=False` without touching state.
    """
    if session.locked:
        return StepResult(ok=False, events=[], error="Board is locked.")
    card = session.find(card_id)
    if card is None:
        return StepResult(ok=False, events=[], error="Unknown card.")
    if card.matched:
        return StepResult(ok=False, events=[], error="Card already matched.")
    if card.revealed:
        return StepResult(ok=False, events=[], error="Card already revealed.")
    if session.first is not None and session.second is not None:
        return StepResult(ok=False, events=[], error="Two cards already selected.")

    before = len(session.event_log)
    # Stays face-up while the pair is compared.
    card.revealed = True
    slot = "first" if session.first is None else "second"
    session.event_log.append({"type": "CARD_REVEALED", "card_id": card.id, "face_key": card.face_key, "slot": slot})
    if session.first is None:
        session.first = card
    else:
        session.second = card
        _resolve(session)
    return StepResult(ok=True, events=session.event_log[before:])


def restart(session: GameSession) -> StepResult:
    before = len(session.event_log)
    if session.pending is not None:
        session.pending.cancel()
        session.pending = None
    session.generation += 1
    session.deck = generate(session.images, session.rng)
    _clear_selection(session)
    session.moves = 0
    session.matches_found = 0
    session.won = False
    session.event_log.append({"type": "SESSION_RESTARTED", "generation": session.generation})
    return StepResult(ok=True, events=session.event_log[before:])


def step(session: GameSession, action: Action) -> StepResult:
    """Apply a single command to the session.

    Mutates `session` in place. Deterministic for a given (seed, images,
    action sequence, elapsed time).
    """
    # Log first so replay sees every attempted command
    session.action_log.append(action)

    if isinstance(action, SelectCardAction):
        return select(session, action.card_id)
    if isinstance(action, RestartAction):
        return restart(session)
    return StepResult(ok=False, events=[], error="Unknown action.")


def selectable_card_ids(session: GameSession) -> list[str]:
    if session.locked or (session.first is not None and session.second is not None):
        return []
    return [c.id for c in session.deck if not c.matched and not c.revealed]


def new_session(
    images: Sequence[str],
    scheduler: Scheduler | None = None,
    seed: int | None = None,
    config: SessionConfig | None = None,
    best_score: int | None = None,
) -> GameSession:
    cfg = config or SessionConfig()
    rng = random.Random(seed)
    imgs = tuple(images)
    return GameSession(
        images=imgs,
        config=cfg,
        scheduler=scheduler if scheduler is not None else TimerQueue(),
        rng=rng,
        deck=generate(imgs, rng),
        seed=seed,
        best_score=best_score,
    )


def replay(
    images: Sequence[str],
    seed: int,
    actions: Iterable[Action],
    config: SessionConfig | None = None,
    best_score: int | None = None,
) -> GameSession:
    """Rebuild a session from its seed, waiting out every memorization window."""
    cfg = config or SessionConfig()
    timers = TimerQueue()
    session = new_session(images, scheduler=timers, seed=seed, config=cfg, best_score=best_score)
    for a in actions:
        step(session, a)
        timers.advance(cfg.flip_delay_ms)
    return session
