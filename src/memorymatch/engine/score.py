from __future__ import annotations

from dataclasses import dataclass

from .serialize import SessionSnapshot


@dataclass(frozen=True)
class ScoreDelta:
    """What changed between two observed snapshots."""

    selection_occurred: bool = False
    pair_resolved: bool = False
    pair_matched: bool = False
    just_won: bool = False
    best_score_changed: bool = False
    restarted: bool = False


class ScoreTracker:
    """Read-only view of moves, matches and best score.

    The session owns the numbers; the tracker only remembers the last
    snapshot it saw so it can tell observers what just happened.
    """

    def __init__(self, initial: SessionSnapshot | None = None) -> None:
        self._last: SessionSnapshot | None = initial

    @property
    def moves(self) -> int:
        return self._last.moves if self._last is not None else 0

    @property
    def matches_found(self) -> int:
        return self._last.matches_found if self._last is not None else 0

    @property
    def total_pairs(self) -> int:
        return self._last.total_pairs if self._last is not None else 0

    @property
    def best_score(self) -> int | None:
        return self._last.best_score if self._last is not None else None

    @property
    def won(self) -> bool:
        return self._last.won if self._last is not None else False

    def observe(self, snap: SessionSnapshot) -> ScoreDelta:
        prev = self._last
        self._last = snap
        if prev is None:
            return ScoreDelta()

        best_changed = snap.best_score != prev.best_score
        if snap.generation != prev.generation:
            return ScoreDelta(restarted=True, best_score_changed=best_changed)

        return ScoreDelta(
            selection_occurred=snap.revealed_count > prev.revealed_count,
            pair_resolved=snap.moves > prev.moves,
            pair_matched=snap.matches_found > prev.matches_found,
            just_won=snap.won and not prev.won,
            best_score_changed=best_changed,
        )
