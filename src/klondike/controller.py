"""Pointer-driven pick up / drag / drop for the Klondike board.

The host hands the controller one ``PointerSample`` per frame. Presses are
resolved against the zone under the press position, drops against the zone
under the release position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from klondike import common as C
from klondike.board import DECK, NO_ZONE, WASTE, Board, Zone, ZoneKind

logger = logging.getLogger(__name__)

# Top-row zone of each column; column 5 has none
_TOP_ROW_ZONES = (
    Zone.foundation(1),
    Zone.foundation(2),
    Zone.foundation(3),
    Zone.foundation(4),
    NO_ZONE,
    WASTE,
    DECK,
)


def _within(value, bounds: Tuple[int, int]) -> bool:
    lo, hi = bounds
    return lo <= value < hi


def resolve_zone(x, y, layout: C.Layout = C.DEFAULT_LAYOUT) -> Zone:
    """Map a screen coordinate to the board zone occupying it."""
    for column in range(1, len(_TOP_ROW_ZONES) + 1):
        if not _within(x, layout.lane_range(column)):
            continue
        if _within(y, layout.top_row_range):
            return _TOP_ROW_ZONES[column - 1]
        if _within(y, layout.playfield_range):
            return Zone.lane(column)
        return NO_ZONE
    return NO_ZONE


@dataclass(frozen=True)
class PointerSample:
    """Primary button state for one frame.

    ``press_pos`` and ``release_pos`` are where the button edges happened;
    they default to ``pos`` when the pointer did not move in between.
    """

    pos: Tuple[int, int]
    pressed: bool = False   # went down this frame
    down: bool = False      # currently held down
    released: bool = False  # went up this frame
    press_pos: Optional[Tuple[int, int]] = None
    release_pos: Optional[Tuple[int, int]] = None


@dataclass
class HeldCard:
    card: C.Card
    origin: Zone
    offset: Tuple[int, int] = (0, 0)


class InteractionController:
    def __init__(self, board: Board, layout: Optional[C.Layout] = None):
        self.board = board
        self.layout = layout or board.layout
        self.held: Optional[HeldCard] = None
        self.moved = False
        self._press_pos: Optional[Tuple[int, int]] = None
        self._press_zone: Zone = NO_ZONE

    @property
    def holding(self) -> bool:
        return self.held is not None

    @property
    def origin(self) -> Zone:
        return self.held.origin if self.held else NO_ZONE

    def cards_in_play(self) -> Iterator[C.Card]:
        yield from self.board.cards()
        if self.held is not None:
            yield self.held.card

    def update(self, sample: PointerSample):
        if sample.pressed:
            self.on_press(sample.press_pos or sample.pos)
        if sample.down:
            self.on_hold(sample.pos)
        if sample.released:
            release_pos = sample.release_pos or sample.pos
            # The card ends the gesture under the pointer that let it go
            self.on_hold(release_pos)
            self.on_release(release_pos)

    # ---------- Transitions ----------
    def on_press(self, pos):
        if self.held is not None:
            logger.debug("Press at %s ignored while holding %r", pos, self.held.card)
            return
        self.moved = False
        self._press_pos = tuple(pos)
        self._press_zone = zone = resolve_zone(pos[0], pos[1], self.layout)

        if zone.kind is ZoneKind.WASTE:
            self._pick_from_waste(pos)
        elif zone.kind is ZoneKind.DECK:
            self.board.draw_card()
        else:
            logger.debug("Press over %r: nothing to pick up", zone)

    def _pick_from_waste(self, pos):
        if not self.board.waste:
            logger.debug("Press over empty waste")
            return
        card = self.board.waste.pop()
        if not card.contains(pos[0], pos[1], self.layout):
            self.board.waste.append(card)
            logger.debug("Press at %s missed %r on the waste", pos, card)
            return
        self.held = HeldCard(card, WASTE, (pos[0] - card.x, pos[1] - card.y))
        logger.debug("Picked up %r from waste", card)

    def on_hold(self, pos):
        if self.held is None:
            return
        dx, dy = self.held.offset
        self.held.card.move_to(pos[0] - dx, pos[1] - dy)
        if not self.moved and tuple(pos) != self._press_pos:
            self.moved = True

    def on_release(self, pos):
        zone = resolve_zone(pos[0], pos[1], self.layout)
        try:
            if not self.moved and self._press_zone.kind is ZoneKind.WASTE and zone.kind is ZoneKind.WASTE:
                self._click_waste()
            elif self.held is not None:
                self._drop(self.held, zone)
        finally:
            self.held = None
            self.moved = False
            self._press_pos = None
            self._press_zone = NO_ZONE

    def _click_waste(self):
        if self.held is not None:
            self.board.return_to_origin(self.held.card, self.held.origin)
            self.held = None
        recycled = self.board.recycle_waste()
        logger.debug("Waste clicked; recycled %d cards", recycled)

    def _drop(self, held: HeldCard, zone: Zone):
        card, origin = held.card, held.origin
        # The card leaves the hand before the board decides where it lands
        self.held = None
        if zone.kind is ZoneKind.FOUNDATION:
            placed = self.board.place_on_foundation(card, zone.index, origin)
        elif zone.kind is ZoneKind.LANE:
            placed = self.board.place_on_lane(card, zone.index, origin)
        else:
            self.board.return_to_origin(card, origin)
            placed = False
        logger.debug("Dropped %r over %r (placed=%s)", card, zone, placed)
