from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

import pygame  # type: ignore[import-not-found]

CONFETTI_COLORS = [
    (240, 90, 90),
    (250, 200, 70),
    (90, 200, 120),
    (80, 160, 240),
    (190, 110, 230),
]


@dataclass
class _Piece:
    x: float
    y: float
    vx: float
    vy: float
    spin: float
    angle: float
    color: tuple[int, int, int]


@dataclass
class Celebration:
    """Confetti burst shown over the board after a win."""

    size: tuple[int, int]
    duration: float = 3.5
    count: int = 160
    gravity: float = 260.0
    elapsed: float = 0.0
    done: bool = False
    rng: random.Random = field(default_factory=random.Random)
    _pieces: list[_Piece] = field(default_factory=list)

    def __post_init__(self) -> None:
        w, _h = self.size
        for _ in range(self.count):
            self._pieces.append(
                _Piece(
                    x=self.rng.uniform(0, w),
                    y=self.rng.uniform(-120, -10),
                    vx=self.rng.uniform(-60, 60),
                    vy=self.rng.uniform(40, 160),
                    spin=self.rng.uniform(-6.0, 6.0),
                    angle=self.rng.uniform(0, math.tau),
                    color=self.rng.choice(CONFETTI_COLORS),
                )
            )

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.done:
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.done = True

    def update(self, dt: float) -> None:
        if self.done:
            return
        self.elapsed += dt
        for p in self._pieces:
            p.vy += self.gravity * dt
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.angle += p.spin * dt
        if self.elapsed >= self.duration:
            self.done = True

    def render(self, screen: pygame.Surface) -> None:
        _w, h = self.size
        for p in self._pieces:
            if p.y > h + 10:
                continue
            # flat rectangles that "flip" as they spin
            pw = max(1, int(abs(math.cos(p.angle)) * 10))
            pygame.draw.rect(screen, p.color, pygame.Rect(int(p.x), int(p.y), pw, 6))
