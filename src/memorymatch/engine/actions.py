from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectCardAction:
    card_id: str


@dataclass(frozen=True)
class RestartAction:
    pass


Action = SelectCardAction | RestartAction
