from __future__ import annotations

import json
import math
import os
import struct
import wave
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


FACE_COLORS: list[tuple[int, int, int]] = [
    (200, 80, 80),
    (80, 140, 210),
    (90, 180, 110),
    (210, 170, 60),
    (160, 100, 200),
    (220, 120, 170),
    (70, 170, 170),
    (150, 120, 80),
]

SFX_TONES: dict[str, list[tuple[float, float]]] = {
    # name -> [(frequency Hz, seconds), ...]
    "flip": [(660.0, 0.06)],
    "match": [(660.0, 0.08), (880.0, 0.10)],
    "win": [(523.0, 0.12), (659.0, 0.12), (784.0, 0.12), (1046.0, 0.25)],
}


def generate_all() -> None:
    root = _repo_root()
    data = json.loads((root / "src" / "memorymatch" / "data" / "faces.json").read_text(encoding="utf-8"))

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 30)

    for fs in data["face_sets"]:
        for i, face in enumerate(fs["faces"]):
            color = FACE_COLORS[i % len(FACE_COLORS)]
            _make_face(root / face["art_path"], color, face.get("name", face["key"]), font)
        _make_card_back(root / fs["card_back"])
        if "background" in fs:
            _make_background(root / fs["background"])

    for name, rel in data.get("sfx", {}).items():
        tones = SFX_TONES.get(name)
        if tones is not None:
            _make_tone(root / rel, tones)

    pygame.quit()
    print("Generated placeholder assets under ./assets/")


def _make_face(path: Path, color: tuple[int, int, int], label: str, font: pygame.font.Font) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    size = (240, 240)
    surf = pygame.Surface(size)
    surf.fill((245, 245, 240))
    pygame.draw.circle(surf, color, (120, 104), 70)
    pygame.draw.circle(surf, (0, 0, 0), (120, 104), 70, width=4)
    txt = font.render(label, True, (20, 20, 20))
    surf.blit(txt, txt.get_rect(center=(120, 206)).topleft)
    pygame.image.save(surf, path.as_posix())


def _make_card_back(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    size = 240
    surf = pygame.Surface((size, size))
    surf.fill((40, 60, 110))
    step = 24
    # diagonal lattice
    for k in range(-size, size * 2, step):
        pygame.draw.line(surf, (70, 100, 170), (k, 0), (k + size, size), 3)
        pygame.draw.line(surf, (70, 100, 170), (k, size), (k + size, 0), 3)
    pygame.image.save(surf, path.as_posix())


def _make_background(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    w, h = 900, 720
    surf = pygame.Surface((w, h))
    for y in range(h):
        t = y / h
        shade = (int(18 + 20 * t), int(22 + 16 * t), int(36 + 30 * t))
        pygame.draw.line(surf, shade, (0, y), (w, y))
    pygame.image.save(surf, path.as_posix())


def _make_tone(path: Path, tones: list[tuple[float, float]], rate: int = 22050) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    frames = bytearray()
    for freq, seconds in tones:
        n = int(rate * seconds)
        for i in range(n):
            # short linear fade keeps the blip from clicking
            env = min(1.0, i / 200.0, (n - i) / 200.0)
            sample = int(12000 * env * math.sin(2 * math.pi * freq * i / rate))
            frames += struct.pack("<h", sample)
    with wave.open(path.as_posix(), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(rate)
        wf.writeframes(bytes(frames))


if __name__ == "__main__":
    generate_all()
