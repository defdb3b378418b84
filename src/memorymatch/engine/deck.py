from __future__ import annotations

import random
import uuid
from typing import Callable, Sequence

from .types import Card

IdFactory = Callable[[], str]


def _uuid_factory(rng: random.Random) -> IdFactory:
    def make() -> str:
        return str(uuid.UUID(int=rng.getrandbits(128), version=4))

    return make


def fisher_yates(rng: random.Random, items: list[Card]) -> None:
    # Walk backwards, swapping i with a uniform pick from [0, i].
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def generate(
    images: Sequence[str],
    rng: random.Random | None = None,
    id_factory: IdFactory | None = None,
) -> list[Card]:
    """Build a shuffled deck holding two cards for every image.

    Ids come from `id_factory`, or from UUIDs drawn off `rng` so that a seeded
    generator reproduces the same deck.
    """
    if len(set(images)) != len(images):
        raise ValueError("Deck images must be distinct.")
    rng = rng or random.Random()
    make_id = id_factory or _uuid_factory(rng)

    cards: list[Card] = []
    for image in images:
        cards.append(Card(id=make_id(), face_key=image))
        cards.append(Card(id=make_id(), face_key=image))

    fisher_yates(rng, cards)
    return cards
