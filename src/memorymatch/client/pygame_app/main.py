from __future__ import annotations

import argparse
import logging

import pygame  # type: ignore[import-not-found]

from memorymatch.paths import get_paths
from memorymatch.services.content import ContentService
from memorymatch.services.scores import JsonScoreStore
from memorymatch.services.telemetry import TelemetryService

from .app import App, GameContext, LaunchOptions
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="memorymatch")
    parser.add_argument("--width", type=int, default=900)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--face-set", default=None, help="face set id from data/faces.json")
    parser.add_argument("--flip-delay", type=int, default=None, help="mismatch delay in ms (overrides settings)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-telemetry", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Memory Match")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(repo_root=paths.repo_root, assets_dir=paths.assets_dir)
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    scores = JsonScoreStore(paths.scores_path)
    telemetry = TelemetryService(paths.telemetry_path, enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        scores=scores,
        telemetry=telemetry,
        options=LaunchOptions(face_set_id=args.face_set, flip_delay_ms=args.flip_delay, seed=args.seed),
    )

    app = App(ctx, BootScene(ctx))
    return app.run()
