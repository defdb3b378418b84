"""Headless rules engine for Memory Match.

IMPORTANT: This package must never import pygame.
"""

from .actions import RestartAction, SelectCardAction
from .deck import generate
from .score import ScoreDelta, ScoreTracker
from .serialize import SessionSnapshot, snapshot
from .session import GameSession, SessionConfig, StepResult, new_session, restart, select, step
from .timers import TimerHandle, TimerQueue
from .types import Card, CardView

__all__ = [
    "Card",
    "CardView",
    "GameSession",
    "RestartAction",
    "ScoreDelta",
    "ScoreTracker",
    "SelectCardAction",
    "SessionConfig",
    "SessionSnapshot",
    "StepResult",
    "TimerHandle",
    "TimerQueue",
    "generate",
    "new_session",
    "restart",
    "select",
    "snapshot",
    "step",
]
