
# __main__.py - entry point
import logging
import os
import random
import sys

import pygame

from klondike import assets
from klondike import common as C
from klondike.assets import AssetLoadError
from klondike.board import KlondikeError
from klondike.scene import KlondikeScene

logger = logging.getLogger("klondike")


def _configure_logging():
    level_name = os.environ.get(C.ENV_LOG_LEVEL, "WARNING").strip().upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _seeded_rng():
    seed = os.environ.get(C.ENV_SEED, "").strip()
    if not seed:
        return None
    try:
        return random.Random(int(seed))
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", C.ENV_SEED, seed)
        return None


def main():
    _configure_logging()
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()

    layout = C.layout_from_env()
    w, h = layout.screen_size
    screen = pygame.display.set_mode((w, h))
    pygame.display.set_caption("Klondike")
    assets.setup_fonts()
    clock = pygame.time.Clock()
    logger.info("Window %dx%d, card size %dx%d", w, h, layout.card_w, layout.card_h)

    try:
        art = assets.load_card_art(layout, os.environ.get(C.ENV_ASSETS) or None)
        scene = KlondikeScene(art=art, layout=layout, rng=_seeded_rng())
    except (AssetLoadError, KlondikeError) as exc:
        logger.error("Cannot start game: %s", exc)
        pygame.quit()
        raise SystemExit(1) from exc

    running = True
    while running:
        dt = clock.tick(60) / 1000.0
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
                break
            scene.handle_event(e)
        if not running:
            break
        scene.update(dt)
        scene.draw(screen)
        pygame.display.flip()
    pygame.quit()

if __name__ == "__main__":
    sys.exit(main())
