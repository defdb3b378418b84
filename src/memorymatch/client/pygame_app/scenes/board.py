from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.actions import Action, RestartAction, SelectCardAction
from memorymatch.engine.score import ScoreDelta, ScoreTracker
from memorymatch.engine.serialize import SessionSnapshot, snapshot
from memorymatch.engine.session import SessionConfig, new_session, step
from memorymatch.engine.timers import TimerQueue
from memorymatch.services.profile import SettingsState
from memorymatch.services.scores import load_best_score, save_best_score

from ..app import GameContext
from ..celebration import Celebration
from ..layout import GridLayout, grid_layout
from ..scene_base import ContextScene, SceneTransition
from ..ui import Button, draw_text, draw_text_centered

GRID_TOP = 110
# room kept free under the grid for the scoreboard and buttons
SCOREBOARD_HEIGHT = 120


class BoardScene(ContextScene):
    """The table: owns one GameSession and turns its snapshots into pixels, sound and confetti."""

    def __init__(self, ctx: GameContext) -> None:
        assert ctx.faces is not None
        super().__init__(ctx)
        self._celebration: Celebration | None = None
        self._grid: GridLayout | None = None
        self._grid_key: tuple[int, int, int] = (0, 0, 0)

        settings = ctx.profile.settings if ctx.profile is not None else SettingsState()
        self.settings = settings
        self.face_set = ctx.faces.get(ctx.options.face_set_id or settings.face_set_id)
        delay = ctx.options.flip_delay_ms if ctx.options.flip_delay_ms is not None else settings.flip_delay_ms

        self.timers = TimerQueue()
        self.session = new_session(
            self.face_set.keys,
            scheduler=self.timers,
            seed=ctx.options.seed,
            config=SessionConfig(flip_delay_ms=float(delay)),
            best_score=load_best_score(ctx.scores),
        )
        self.snap: SessionSnapshot = snapshot(self.session)
        self.tracker = ScoreTracker(self.snap)

        w, h = ctx.screen.get_size()
        self.btn_restart = Button(rect=pygame.Rect(w - 300, h - 70, 130, 46), text="Restart", on_click=self._on_restart, hotkey=pygame.K_r)
        self.btn_menu = Button(rect=pygame.Rect(w - 160, h - 70, 130, 46), text="Menu", on_click=self._on_menu)

        self.ctx.telemetry.log("session_started", {"face_set": self.face_set.id, "pairs": self.snap.total_pairs})

    # -------- layout --------
    def _layout(self) -> GridLayout:
        w, h = self.ctx.screen.get_size()
        n = len(self.snap.deck)
        if self._grid is None or self._grid_key != (n, w, h):
            self._grid = grid_layout(n, w, GRID_TOP, h - SCOREBOARD_HEIGHT)
            self._grid_key = (n, w, h)
        return self._grid

    def _card_rect(self, index: int) -> pygame.Rect:
        return pygame.Rect(self._layout().cell(index))

    def _hit_test_card(self, pos: tuple[int, int]) -> str | None:
        for i, card in enumerate(self.snap.deck):
            if self._card_rect(i).collidepoint(pos):
                return card.id
        return None

    # -------- commands --------
    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self._go(MainMenuScene(self.ctx))

    def _on_restart(self) -> None:
        self._apply(RestartAction())

    def _apply(self, action: Action) -> None:
        res = step(self.session, action)
        if res.ok:
            self._observe()

    def _observe(self) -> None:
        self.snap = snapshot(self.session)
        self._side_effects(self.tracker.observe(self.snap))

    def _side_effects(self, delta: ScoreDelta) -> None:
        sfx = self.ctx.faces.sfx if self.ctx.faces is not None else {}
        if delta.restarted:
            self._celebration = None
        if delta.selection_occurred and self.settings.sound_enabled:
            self.ctx.assets.play(sfx.get("flip"))
        if delta.pair_matched and not delta.just_won and self.settings.sound_enabled:
            self.ctx.assets.play(sfx.get("match"))
        if delta.just_won:
            if self.settings.sound_enabled:
                self.ctx.assets.play(sfx.get("win"))
            if self.settings.celebrate:
                self._celebration = Celebration(size=self.ctx.screen.get_size())
            if self.ctx.profile is not None:
                self.ctx.profile.record_win()
            self.ctx.telemetry.log_result(self.face_set.id, self.snap)
        if delta.best_score_changed and self.snap.best_score is not None:
            save_best_score(self.ctx.scores, self.snap.best_score)

    # -------- scene protocol --------
    def handle_event(self, event: pygame.event.Event) -> None:
        if self._celebration is not None:
            self._celebration.handle_event(event)
        if self.btn_restart.handle_event(event) or self.btn_menu.handle_event(event):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            card_id = self._hit_test_card(event.pos)
            if card_id is not None:
                self._apply(SelectCardAction(card_id=card_id))

    def update(self, dt: float) -> SceneTransition | None:
        if self.timers.advance(dt * 1000.0):
            self._observe()
        if self._celebration is not None:
            self._celebration.update(dt)
            if self._celebration.done:
                self._celebration = None
        return self._take_transition()

    def render(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        if self.face_set.background is not None:
            screen.blit(self.ctx.assets.get_image(self.face_set.background, size=screen.get_size()), (0, 0))
        else:
            screen.fill((16, 20, 30))
        draw_text_centered(screen, fonts.big, "Memory Card Game", (screen.get_width() // 2, 50))

        for i, card in enumerate(self.snap.deck):
            self._draw_card(screen, i, card.face_key, face_up=card.revealed or card.matched, matched=card.matched)

        self._draw_scoreboard(screen)
        self.btn_restart.draw(screen, fonts.ui)
        self.btn_menu.draw(screen, fonts.ui)

        if self.snap.won:
            self._draw_won_banner(screen)
        if self._celebration is not None:
            self._celebration.render(screen)

    def _draw_card(self, screen: pygame.Surface, index: int, face_key: str, face_up: bool, matched: bool) -> None:
        rect = self._card_rect(index)
        size = (rect.width, rect.height)
        if face_up:
            art = self.face_set.art_for(face_key)
            img = self.ctx.assets.get_image(art, size=size) if art is not None else None
            if img is None:
                pygame.draw.rect(screen, (230, 230, 230), rect, border_radius=12)
                draw_text_centered(screen, self.ctx.assets.fonts.small, face_key, rect.center, color=(20, 20, 20))
            else:
                screen.blit(img, rect.topleft)
        else:
            screen.blit(self.ctx.assets.get_image(self.face_set.card_back, size=size), rect.topleft)
        border = (90, 200, 120) if matched else (0, 0, 0)
        pygame.draw.rect(screen, border, rect, width=3, border_radius=12)

    def _draw_scoreboard(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        y = screen.get_height() - 110
        draw_text(screen, fonts.ui, f"Moves: {self.tracker.moves}", (40, y))
        draw_text(screen, fonts.ui, f"Matches: {self.tracker.matches_found} / {self.tracker.total_pairs}", (40, y + 30))
        if self.tracker.best_score is not None:
            draw_text(screen, fonts.ui, f"Best Score: {self.tracker.best_score} moves", (40, y + 60))

    def _draw_won_banner(self, screen: pygame.Surface) -> None:
        # sits between the title and the grid
        draw_text_centered(
            screen,
            self.ctx.assets.fonts.ui,
            f"All pairs found in {self.snap.moves} moves! Press R to play again.",
            (screen.get_width() // 2, GRID_TOP - 22),
            color=(250, 220, 120),
        )
