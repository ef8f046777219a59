import random

import pygame
import pytest

from klondike import assets
from klondike import common as C
from klondike.scene import KlondikeScene

LAYOUT = C.DEFAULT_LAYOUT
WASTE_POS = (LAYOUT.waste_slot[0] + 10, LAYOUT.waste_slot[1] + 10)
DECK_POS = (LAYOUT.deck_slot[0] + 10, LAYOUT.deck_slot[1] + 10)
LANE2_POS = (LAYOUT.lane_x(2) + 10, LAYOUT.playfield_range[0] + 10)
DEAD_SPACE = (LAYOUT.lane_x(5) + 10, LAYOUT.top_row_range[0] + 10)


def down(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": pos, "button": 1})


def up(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, {"pos": pos, "button": 1})


def motion(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, {"pos": pos, "rel": (0, 0), "buttons": (1, 0, 0)})


def frame(scene, *events):
    for e in events:
        scene.handle_event(e)
    scene.update(0)


@pytest.fixture
def scene(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    sc = KlondikeScene(assets.load_card_art(LAYOUT), LAYOUT, rng=random.Random(3))
    # Empty lane 2 onto the deck so any card may land there
    board = sc.board
    board.deck.extend(board.lanes[1])
    board.lanes[1] = []
    return sc


def test_press_uses_button_down_position_when_motion_follows(scene):
    frame(scene, down(DECK_POS), up(DECK_POS))
    drawn = scene.board.waste[-1]

    frame(scene, down(WASTE_POS), motion((WASTE_POS[0] - 200, WASTE_POS[1] + 200)))
    assert scene.controller.holding
    assert scene.controller.held.card is drawn
    assert scene.controller.moved


def test_release_uses_button_up_position_when_motion_follows(scene):
    frame(scene, down(DECK_POS), up(DECK_POS))
    drawn = scene.board.waste[-1]

    frame(scene, down(WASTE_POS))
    frame(scene, motion(LANE2_POS))
    frame(scene, up(LANE2_POS), motion(DEAD_SPACE))
    assert not scene.controller.holding
    assert scene.board.lane(2) == [drawn]
    assert drawn not in scene.board.waste


def test_click_on_waste_in_one_frame_is_not_a_drag(scene):
    board = scene.board
    while board.deck:
        frame(scene, down(DECK_POS), up(DECK_POS))
    waste = list(board.waste)

    frame(scene, down(WASTE_POS), up(WASTE_POS), motion(DEAD_SPACE))
    assert board.waste == []
    assert board.deck == waste


def test_new_deal_key_replaces_board(scene):
    old = scene.board
    frame(scene, pygame.event.Event(pygame.KEYDOWN, {"key": pygame.K_n, "mod": 0}))
    assert scene.board is not old
    assert len(scene.board.deck) == 24
    assert not scene.controller.holding


def test_draw_paints_without_error(scene):
    frame(scene, down(DECK_POS), up(DECK_POS))
    frame(scene, down(WASTE_POS), motion(LANE2_POS))
    scene.draw(pygame.Surface(LAYOUT.screen_size))
