from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.services.scores import load_best_score

from ..app import GameContext
from ..scene_base import ContextScene
from ..ui import Button, draw_text
from .board import BoardScene
from .settings import SettingsScene


class MainMenuScene(ContextScene):
    def __init__(self, ctx: GameContext) -> None:
        super().__init__(ctx)
        self._best = load_best_score(self.ctx.scores)
        x, y, w, h, gap = 60, 180, 320, 56, 14

        self._buttons = [
            Button(
                rect=pygame.Rect(x, y, w, h),
                text="Play",
                on_click=lambda: self._go(BoardScene(self.ctx)),
            ),
            Button(
                rect=pygame.Rect(x, y + (h + gap) * 1, w, h),
                text="Settings",
                on_click=lambda: self._go(SettingsScene(self.ctx)),
            ),
            Button(
                rect=pygame.Rect(x, y + (h + gap) * 2, w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Memory Match", (60, 50))
        best = f"{self._best} moves" if self._best is not None else "-"
        won = self.ctx.profile.profile.games_won if self.ctx.profile is not None else 0
        draw_text(screen, fonts.ui, f"Best Score: {best}   Games won: {won}", (60, 110))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
