from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from memorymatch.paths import Paths
from memorymatch.services.content import ContentService, FaceCatalog
from memorymatch.services.profile import ProfileService
from memorymatch.services.scores import ScoreStore
from memorymatch.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene


@dataclass
class LaunchOptions:
    face_set_id: str | None = None
    flip_delay_ms: int | None = None
    seed: int | None = None


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    scores: ScoreStore
    telemetry: TelemetryService
    options: LaunchOptions

    # Loaded at boot
    faces: Optional[FaceCatalog] = None
    profile: Optional[ProfileService] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        pygame.quit()
        return 0
