from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import pygame  # type: ignore[import-not-found]

if TYPE_CHECKING:
    from .app import GameContext


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


class ContextScene:
    """Shared plumbing for scenes that hold the GameContext and switch scenes from button callbacks.

    Callbacks call `_go(scene)`; the app loop picks the request up from the next `update`.
    """

    def __init__(self, ctx: "GameContext") -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _take_transition(self) -> SceneTransition | None:
        nxt, self._next = self._next, None
        return nxt

    def handle_event(self, event: pygame.event.Event) -> None:
        pass

    def update(self, dt: float) -> SceneTransition | None:
        return self._take_transition()

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
