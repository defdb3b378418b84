from __future__ import annotations

import random
from collections import Counter

import pytest

from memorymatch.engine.deck import fisher_yates, generate
from memorymatch.engine.types import Card

IMAGES = ["books", "fashion", "football", "shoes", "violin"]


def test_pairing_invariant() -> None:
    for n in range(1, len(IMAGES) + 1):
        deck = generate(IMAGES[:n], random.Random(n))
        assert len(deck) == 2 * n
        counts = Counter(c.face_key for c in deck)
        assert set(counts) == set(IMAGES[:n])
        assert all(v == 2 for v in counts.values())
        assert all(not c.matched and not c.revealed for c in deck)


def test_ids_unique_within_and_across_generations() -> None:
    rng = random.Random(7)
    a = generate(IMAGES, rng)
    b = generate(IMAGES, rng)
    ids_a = {c.id for c in a}
    ids_b = {c.id for c in b}
    assert len(ids_a) == len(a)
    assert len(ids_b) == len(b)
    assert not ids_a & ids_b


def test_unseeded_generations_do_not_share_ids() -> None:
    a = generate(IMAGES)
    b = generate(IMAGES)
    assert not {c.id for c in a} & {c.id for c in b}


def test_custom_id_factory() -> None:
    counter = iter(range(100))
    deck = generate(["x", "y"], random.Random(0), id_factory=lambda: f"card-{next(counter)}")
    assert sorted(c.id for c in deck) == ["card-0", "card-1", "card-2", "card-3"]


def test_duplicate_images_rejected() -> None:
    with pytest.raises(ValueError):
        generate(["books", "books"])


def test_empty_image_list_gives_empty_deck() -> None:
    assert generate([]) == []


def test_shuffle_has_no_positional_bias() -> None:
    rng = random.Random(2024)
    size = 6
    trials = 30000
    # position counts for the card that starts at index 0
    hits = [0] * size
    for _ in range(trials):
        cards = [Card(id=str(i), face_key=str(i)) for i in range(size)]
        fisher_yates(rng, cards)
        pos = next(i for i, c in enumerate(cards) if c.id == "0")
        hits[pos] += 1
    expected = trials / size
    for h in hits:
        assert abs(h - expected) < expected * 0.06


def test_shuffle_reaches_every_ordering_of_small_deck() -> None:
    rng = random.Random(5)
    seen: Counter[tuple[str, ...]] = Counter()
    for _ in range(6000):
        cards = [Card(id=k, face_key=k) for k in "abc"]
        fisher_yates(rng, cards)
        seen[tuple(c.id for c in cards)] += 1
    assert len(seen) == 6
    for count in seen.values():
        assert 850 < count < 1150
