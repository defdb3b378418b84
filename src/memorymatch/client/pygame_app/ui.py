from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_text_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


BUTTON_BG = (52, 66, 92)
BUTTON_HOVER_BG = (70, 88, 122)
BUTTON_DISABLED_BG = (30, 30, 36)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True
    hotkey: int | None = None
    hovered: bool = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        if self.hotkey is not None and event.type == pygame.KEYDOWN and event.key == self.hotkey:
            self.on_click()
            return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        if not self.enabled:
            bg = BUTTON_DISABLED_BG
        else:
            bg = BUTTON_HOVER_BG if self.hovered else BUTTON_BG
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        draw_text_centered(screen, font, self.text, self.rect.center)


@dataclass
class Toggle:
    rect: pygame.Rect
    label: str
    value: bool
    on_change: Callable[[bool], None]

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.value = not self.value
                self.on_change(self.value)
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        pygame.draw.rect(screen, (40, 40, 48), self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        box = pygame.Rect(self.rect.x + 10, self.rect.y + 10, 22, 22)
        pygame.draw.rect(screen, (220, 220, 220), box, width=2)
        if self.value:
            pygame.draw.line(screen, (220, 220, 220), (box.x + 4, box.y + 12), (box.x + 10, box.y + 18), 3)
            pygame.draw.line(screen, (220, 220, 220), (box.x + 10, box.y + 18), (box.x + 18, box.y + 6), 3)
        draw_text(screen, font, self.label, (box.right + 10, self.rect.y + 8))


@dataclass
class Stepper:
    """Numeric setting nudged with - / + boxes; the value is clamped to [lo, hi]."""

    rect: pygame.Rect
    label: str
    value: int
    step: int
    lo: int
    hi: int
    on_change: Callable[[int], int | None]
    unit: str = ""

    @property
    def minus_rect(self) -> pygame.Rect:
        return pygame.Rect(self.rect.right - 2 * self.rect.height - 6, self.rect.y, self.rect.height, self.rect.height)

    @property
    def plus_rect(self) -> pygame.Rect:
        return pygame.Rect(self.rect.right - self.rect.height, self.rect.y, self.rect.height, self.rect.height)

    def nudge(self, direction: int) -> bool:
        target = max(self.lo, min(self.hi, self.value + direction * self.step))
        if target == self.value:
            return False
        accepted = self.on_change(target)
        # the owner may clamp further and report what it stored
        self.value = accepted if accepted is not None else target
        return True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.minus_rect.collidepoint(event.pos):
                self.nudge(-1)
                return True
            if self.plus_rect.collidepoint(event.pos):
                self.nudge(+1)
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        pygame.draw.rect(screen, (40, 40, 48), self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        draw_text(screen, font, f"{self.label}: {self.value}{self.unit}", (self.rect.x + 12, self.rect.y + 8))
        for box, glyph, live in (
            (self.minus_rect, "-", self.value > self.lo),
            (self.plus_rect, "+", self.value < self.hi),
        ):
            pygame.draw.rect(screen, BUTTON_BG if live else BUTTON_DISABLED_BG, box, border_radius=8)
            draw_text_centered(screen, font, glyph, box.center)
