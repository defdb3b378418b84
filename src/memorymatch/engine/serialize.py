from __future__ import annotations

from dataclasses import dataclass

from .actions import Action, RestartAction, SelectCardAction
from .session import GameSession
from .types import CardView


@dataclass(frozen=True)
class SessionSnapshot:
    deck: tuple[CardView, ...]
    moves: int
    matches_found: int
    total_pairs: int
    best_score: int | None
    locked: bool
    won: bool
    generation: int

    def card(self, card_id: str) -> CardView | None:
        for c in self.deck:
            if c.id == card_id:
                return c
        return None

    @property
    def revealed_count(self) -> int:
        return sum(1 for c in self.deck if c.revealed)


def snapshot(session: GameSession) -> SessionSnapshot:
    """Freeze the observable part of a session for presentation layers."""
    return SessionSnapshot(
        deck=tuple(CardView.of(c) for c in session.deck),
        moves=session.moves,
        matches_found=session.matches_found,
        total_pairs=session.total_pairs,
        best_score=session.best_score,
        locked=session.locked,
        won=session.won,
        generation=session.generation,
    )


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "card_id": a.card_id}
    if isinstance(a, RestartAction):
        return {"type": "restart"}
    # should be unreachable
    return {"type": "unknown"}


def snapshot_to_dict(snap: SessionSnapshot) -> dict[str, object]:
    return {
        "deck": [
            {"id": c.id, "face_key": c.face_key, "matched": c.matched, "revealed": c.revealed}
            for c in snap.deck
        ],
        "moves": snap.moves,
        "matches_found": snap.matches_found,
        "total_pairs": snap.total_pairs,
        "best_score": snap.best_score,
        "locked": snap.locked,
        "won": snap.won,
        "generation": snap.generation,
    }
