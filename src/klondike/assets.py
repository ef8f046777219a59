# assets.py - card faces and the shared card back
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional, Tuple

import pygame

from klondike import common as C

logger = logging.getLogger(__name__)

BACK_FILENAME = "card_back.png"

# Fonts are initialized via setup_fonts() AFTER pygame.init()
FONT_CORNER_RANK = None


class AssetLoadError(RuntimeError):
    """A card image could not be loaded; the game cannot start without it."""


class CardArt:
    """Face surfaces keyed by (rank, suit), plus one back shared by every card."""

    def __init__(self, faces: Dict[Tuple[C.Rank, C.Suit], pygame.Surface], back: pygame.Surface):
        self.faces = faces
        self.back = back

    def face_for(self, rank, suit):
        return self.faces[(rank, suit)]


def setup_fonts():
    global FONT_CORNER_RANK
    FONT_CORNER_RANK = pygame.font.SysFont(pygame.font.get_default_font(), 20, bold=True)


def face_filename(rank, suit) -> str:
    return f"{C.Rank(rank).file_name}_of_{C.Suit(suit).file_name}.png"


def _load_scaled(path, size):
    if not os.path.isfile(path):
        raise AssetLoadError(f"Missing card image: {path}")
    try:
        surf = pygame.image.load(path)
    except pygame.error as exc:
        raise AssetLoadError(f"Could not load card image {path}: {exc}") from exc
    if surf.get_size() != size:
        surf = pygame.transform.smoothscale(surf, size)
    return surf


def load_card_art(layout: C.Layout, asset_dir: Optional[str] = None, max_workers: int = 8) -> CardArt:
    """Load all 52 faces and the back.

    With an ``asset_dir`` every face is read from disk, one load per card,
    and the call returns only once all of them have finished. Without one
    the faces are drawn procedurally.
    """
    size = (layout.card_w, layout.card_h)
    if not asset_dir:
        logger.info("No card asset folder configured; drawing cards procedurally")
        faces = {(rank, suit): draw_face(rank, suit, size) for rank in C.RANKS for suit in C.SUITS}
        return CardArt(faces, draw_back(size))

    keys = [(rank, suit) for rank in C.RANKS for suit in C.SUITS]
    logger.info("Loading %d card faces from %s", len(keys), asset_dir)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            key: pool.submit(_load_scaled, os.path.join(asset_dir, face_filename(*key)), size)
            for key in keys
        }
        faces = {key: future.result() for key, future in futures.items()}
    back = _load_scaled(os.path.join(asset_dir, BACK_FILENAME), size)
    return CardArt(faces, back)


# ---------- Procedural art ----------
def draw_suit_shape(surface, center, suit, color, size=30):
    x, y = center
    if suit == C.Suit.DIAMONDS:
        half = size // 2
        points = [(x, y - half), (x + half, y), (x, y + half), (x - half, y)]
        pygame.draw.polygon(surface, color, points)
    elif suit == C.Suit.HEARTS:
        r = size // 3
        pygame.draw.circle(surface, color, (x - r, y - r), r)
        pygame.draw.circle(surface, color, (x + r, y - r), r)
        tri = [(x - 2 * r, y - r), (x + 2 * r, y - r), (x, y + 2 * r)]
        pygame.draw.polygon(surface, color, tri)
    elif suit == C.Suit.SPADES:
        r = size // 3
        pygame.draw.circle(surface, color, (x - r, y), r)
        pygame.draw.circle(surface, color, (x + r, y), r)
        tri = [(x - 2 * r, y), (x + 2 * r, y), (x, y - 2 * r)]
        pygame.draw.polygon(surface, color, tri)
        stem_w = max(4, size // 6)
        pygame.draw.rect(surface, color, (x - stem_w // 2, y + r, stem_w, size // 2))
    else:  # clubs
        r = size // 3
        pygame.draw.circle(surface, color, (x, y - r), r)
        pygame.draw.circle(surface, color, (x - r, y + r // 3), r)
        pygame.draw.circle(surface, color, (x + r, y + r // 3), r)
        stem_w = max(4, size // 6)
        pygame.draw.rect(surface, color, (x - stem_w // 2, y + r, stem_w, size // 2))


def draw_face(rank, suit, size):
    w, h = size
    surf = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.rect(surf, C.WHITE, (0, 0, w, h), border_radius=C.CARD_RADIUS)
    pygame.draw.rect(surf, C.BLACK, (0, 0, w, h), width=2, border_radius=C.CARD_RADIUS)
    color = C.RED if C.is_red(suit) else C.BLACK
    margin = 4
    if FONT_CORNER_RANK is not None:
        rtxt = FONT_CORNER_RANK.render(C.RANK_TO_TEXT[rank], True, color)
        surf.blit(rtxt, (margin, margin))
    draw_suit_shape(surf, (w // 2, h // 2 + h // 10), suit, color, size=min(w, h) // 2)
    return surf


def draw_back(size):
    w, h = size
    surf = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.rect(surf, C.WHITE, (0, 0, w, h), border_radius=C.CARD_RADIUS)
    pygame.draw.rect(surf, C.BLACK, (0, 0, w, h), width=2, border_radius=C.CARD_RADIUS)
    inset = 5
    inner_rect = pygame.Rect(inset, inset, w - 2 * inset, h - 2 * inset)
    pygame.draw.rect(surf, C.BLUE, inner_rect, border_radius=4)
    for i in range(-h, w, 10):
        pygame.draw.line(surf, C.LIGHT, (i, inset), (i + h, h - inset), 1)
    return surf
