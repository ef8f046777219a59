# scene.py - pygame host for the Klondike board
import logging
import random
from typing import Optional

import pygame

from klondike import common as C
from klondike.assets import CardArt
from klondike.board import Board
from klondike.controller import InteractionController, PointerSample

logger = logging.getLogger(__name__)


class KlondikeScene:
    def __init__(self, art: CardArt, layout: C.Layout = C.DEFAULT_LAYOUT, rng: Optional[random.Random] = None):
        self.art = art
        self.layout = layout
        self.rng = rng
        self.board: Optional[Board] = None
        self.controller: Optional[InteractionController] = None
        # Button edges seen since the last update(), with where they happened
        self._pressed = False
        self._released = False
        self._press_pos = None
        self._release_pos = None
        self._button_down = False
        self._pointer = (0, 0)
        self.deal_new()

    def deal_new(self):
        self.board = Board(self.layout, card_back=self.art.back, rng=self.rng)
        self.board.initialize_deck(self.art.faces)
        self.board.initialize_playfield()
        self.controller = InteractionController(self.board, self.layout)
        self._clear_edges()
        self._button_down = False
        logger.info("New deal started")

    def _clear_edges(self):
        self._pressed = self._released = False
        self._press_pos = self._release_pos = None

    # ---------- Input ----------
    def handle_event(self, e):
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self._pointer = self._press_pos = tuple(e.pos)
            self._pressed = True
            self._button_down = True
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._pointer = self._release_pos = tuple(e.pos)
            self._released = True
            self._button_down = False
        elif e.type == pygame.MOUSEMOTION:
            self._pointer = tuple(e.pos)
        elif e.type == pygame.KEYDOWN:
            if e.key == pygame.K_n:
                self.deal_new()
            elif e.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))

    def sample_pointer(self) -> PointerSample:
        return PointerSample(
            pos=self._pointer,
            pressed=self._pressed,
            down=self._button_down,
            released=self._released,
            press_pos=self._press_pos,
            release_pos=self._release_pos,
        )

    def update(self, dt):
        self.controller.update(self.sample_pointer())
        self._clear_edges()

    # ---------- Drawing ----------
    def _blit_card(self, screen, card):
        if card.face_up:
            surf = card.face if card.face is not None else self.art.face_for(card.rank, card.suit)
        else:
            surf = self.board.card_back
        screen.blit(surf, (card.x, card.y))

    def _draw_slot(self, screen, xy):
        pygame.draw.rect(
            screen,
            (255, 255, 255),
            (xy[0], xy[1], self.layout.card_w, self.layout.card_h),
            border_radius=C.CARD_RADIUS,
            width=2,
        )

    def draw(self, screen):
        screen.fill(C.TABLE_BG)
        lay = self.layout
        for n in range(1, 5):
            self._draw_slot(screen, lay.foundation_slot(n))
        for n in range(1, 8):
            self._draw_slot(screen, lay.lane_slot(n))
        self._draw_slot(screen, lay.waste_slot)
        self._draw_slot(screen, lay.deck_slot)

        board = self.board
        for card in board.deck:
            self._blit_card(screen, card)
        for card in board.waste:
            self._blit_card(screen, card)
        for lane in board.lanes:
            for card in lane:
                self._blit_card(screen, card)
        for foundation in board.foundations:
            for card in foundation:
                self._blit_card(screen, card)
        held = self.controller.held
        if held is not None:
            self._blit_card(screen, held.card)
