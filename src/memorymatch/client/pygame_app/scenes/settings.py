from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.services.profile import MAX_FLIP_DELAY_MS, MIN_FLIP_DELAY_MS

from ..app import GameContext
from ..scene_base import ContextScene
from ..ui import Button, Stepper, Toggle, draw_text

DELAY_STEP_MS = 100


class SettingsScene(ContextScene):
    def __init__(self, ctx: GameContext) -> None:
        super().__init__(ctx)
        prof = self.ctx.profile
        sound = prof.settings.sound_enabled if prof is not None else True
        celebrate = prof.settings.celebrate if prof is not None else True
        delay = prof.settings.flip_delay_ms if prof is not None else 800

        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="Back", on_click=self._on_back)
        self.toggle_sound = Toggle(
            rect=pygame.Rect(40, 130, 420, 44),
            label="Play sounds",
            value=sound,
            on_change=self._on_toggle_sound,
        )
        self.toggle_celebrate = Toggle(
            rect=pygame.Rect(40, 184, 420, 44),
            label="Confetti on win",
            value=celebrate,
            on_change=self._on_toggle_celebrate,
        )
        self.btn_faces = Button(rect=pygame.Rect(40, 250, 420, 44), text="Next face set", on_click=self._on_next_faces)
        self.delay_stepper = Stepper(
            rect=pygame.Rect(40, 330, 420, 44),
            label="Mismatch peek",
            value=delay,
            step=DELAY_STEP_MS,
            lo=MIN_FLIP_DELAY_MS,
            hi=MAX_FLIP_DELAY_MS,
            on_change=self._on_delay,
            unit=" ms",
        )

    def _on_back(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_toggle_sound(self, value: bool) -> None:
        if self.ctx.profile is not None:
            self.ctx.profile.set_sound_enabled(value)

    def _on_toggle_celebrate(self, value: bool) -> None:
        if self.ctx.profile is not None:
            self.ctx.profile.set_celebrate(value)

    def _on_next_faces(self) -> None:
        prof = self.ctx.profile
        faces = self.ctx.faces
        if prof is None or faces is None:
            return
        ids = faces.ids()
        current = faces.get(prof.settings.face_set_id).id
        prof.set_face_set(ids[(ids.index(current) + 1) % len(ids)])

    def _on_delay(self, value_ms: int) -> int | None:
        if self.ctx.profile is None:
            return None
        return self.ctx.profile.set_flip_delay(value_ms)

    def handle_event(self, event: pygame.event.Event) -> None:
        self.btn_back.handle_event(event)
        self.toggle_sound.handle_event(event)
        self.toggle_celebrate.handle_event(event)
        self.btn_faces.handle_event(event)
        self.delay_stepper.handle_event(event)

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        self.btn_back.draw(screen, fonts.ui)
        draw_text(screen, fonts.big, "Settings", (40, 76))
        self.toggle_sound.draw(screen, fonts.ui)
        self.toggle_celebrate.draw(screen, fonts.ui)
        self.btn_faces.draw(screen, fonts.ui)
        self.delay_stepper.draw(screen, fonts.ui)

        prof = self.ctx.profile
        if prof is not None and self.ctx.faces is not None:
            fs = self.ctx.faces.get(prof.settings.face_set_id)
            draw_text(screen, fonts.small, f"Face set: {fs.title} ({len(fs.faces)} pairs)", (480, 262))
