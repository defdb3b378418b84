from __future__ import annotations

from dataclasses import dataclass

Event = dict[str, object]


@dataclass
class Card:
    """A single card on the table.

    `revealed` and `matched` are flipped in place by the session; a new deck
    always brings new Card objects.
    """

    id: str
    face_key: str
    matched: bool = False
    revealed: bool = False


@dataclass(frozen=True)
class CardView:
    """Read-only copy of a Card handed to observers."""

    id: str
    face_key: str
    matched: bool
    revealed: bool

    @staticmethod
    def of(card: Card) -> "CardView":
        return CardView(id=card.id, face_key=card.face_key, matched=card.matched, revealed=card.revealed)
