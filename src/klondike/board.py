"""Klondike board: card containers, dealing and move rules.

The board knows nothing about pointers or pixels beyond the ``Layout`` it
uses to position cards. Moves validate before mutating; a rejected move
hands the card back to the zone it was lifted from.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from klondike import common as C

logger = logging.getLogger(__name__)

LANE_COUNT = 7
FOUNDATION_COUNT = 4
DEAL_SIZE = sum(range(1, LANE_COUNT + 1))  # 28


class KlondikeError(RuntimeError):
    """Base class for unrecoverable board errors."""


class DealError(KlondikeError):
    """The playfield was dealt from a deck that cannot fill it."""


class InvalidOriginError(KlondikeError):
    """A card was sent back to a zone it can never have come from."""


class ZoneKind(Enum):
    NONE = auto()
    DECK = auto()
    WASTE = auto()
    LANE = auto()
    FOUNDATION = auto()


@dataclass(frozen=True)
class Zone:
    kind: ZoneKind
    index: int = 0

    @classmethod
    def lane(cls, n: int) -> "Zone":
        return cls(ZoneKind.LANE, n)

    @classmethod
    def foundation(cls, n: int) -> "Zone":
        return cls(ZoneKind.FOUNDATION, n)

    def __repr__(self):
        if self.kind in (ZoneKind.LANE, ZoneKind.FOUNDATION):
            return f"{self.kind.name.title()}({self.index})"
        return self.kind.name.title()


NO_ZONE = Zone(ZoneKind.NONE)
DECK = Zone(ZoneKind.DECK)
WASTE = Zone(ZoneKind.WASTE)


def can_stack_on_lane(card: C.Card, top: Optional[C.Card]) -> bool:
    """Descending rank, alternating colour. Anything goes on an empty lane."""
    if top is None:
        return True
    return C.is_red(card.suit) != C.is_red(top.suit) and card.rank + 1 == top.rank


def can_stack_on_foundation(card: C.Card, top: Optional[C.Card]) -> bool:
    """Ascending rank, same suit. The first card sets the foundation's suit."""
    if top is None:
        return True
    return card.suit == top.suit and card.rank == top.rank + 1


def _check_index(index: int, count: int, what: str):
    if not 1 <= index <= count:
        raise ValueError(f"{what} index must be in 1..{count}, got {index}")


class Board:
    def __init__(self, layout: C.Layout = C.DEFAULT_LAYOUT, card_back: Any = None, rng: Optional[random.Random] = None):
        self.layout = layout
        self.card_back = card_back
        self.rng = rng or random.Random()
        self.deck: List[C.Card] = []
        self.waste: List[C.Card] = []
        self.lanes: List[List[C.Card]] = [[] for _ in range(LANE_COUNT)]
        self.foundations: List[List[C.Card]] = [[] for _ in range(FOUNDATION_COUNT)]

    # ---------- Queries ----------
    def lane(self, n: int) -> List[C.Card]:
        _check_index(n, LANE_COUNT, "lane")
        return self.lanes[n - 1]

    def foundation(self, n: int) -> List[C.Card]:
        _check_index(n, FOUNDATION_COUNT, "foundation")
        return self.foundations[n - 1]

    def pile_for(self, zone: Zone) -> Optional[List[C.Card]]:
        if zone.kind is ZoneKind.DECK:
            return self.deck
        if zone.kind is ZoneKind.WASTE:
            return self.waste
        if zone.kind is ZoneKind.LANE:
            return self.lane(zone.index)
        if zone.kind is ZoneKind.FOUNDATION:
            return self.foundation(zone.index)
        return None

    def top_of(self, zone: Zone) -> Optional[C.Card]:
        pile = self.pile_for(zone)
        return pile[-1] if pile else None

    def cards(self) -> Iterator[C.Card]:
        yield from self.deck
        yield from self.waste
        for lane in self.lanes:
            yield from lane
        for foundation in self.foundations:
            yield from foundation

    def card_count(self) -> int:
        return sum(1 for _ in self.cards())

    # ---------- Deck & deal ----------
    def initialize_deck(self, faces: Optional[Mapping[Tuple[C.Rank, C.Suit], Any]] = None):
        """Build and shuffle all 52 cards face-down on the deck slot."""
        x, y = self.layout.deck_slot
        deck = []
        for rank in C.RANKS:
            for suit in C.SUITS:
                face = faces.get((rank, suit)) if faces is not None else None
                deck.append(C.Card(rank, suit, x, y, face_up=False, face=face))
        self.rng.shuffle(deck)
        self.deck = deck
        logger.info("Deck built and shuffled (%d cards)", len(deck))

    def initialize_playfield(self):
        """Deal 1..7 cards into the lanes; only each lane's last card faces up."""
        if len(self.deck) < DEAL_SIZE:
            raise DealError(f"Need {DEAL_SIZE} cards to deal the playfield, deck has {len(self.deck)}")
        playfield_top = self.layout.playfield_range[0]
        for col in range(LANE_COUNT):
            x = self.layout.lane_x(col + 1)
            for row in range(col + 1):
                card = self.deck.pop()
                card.move_to(x, playfield_top + row * self.layout.padding)
                card.face_up = (row == col)
                self.lanes[col].append(card)
        logger.info("Playfield dealt; %d cards left in deck", len(self.deck))

    def draw_card(self) -> Optional[C.Card]:
        """Turn the deck's top card onto the waste pile."""
        if not self.deck:
            logger.debug("Draw ignored: deck is empty")
            return None
        card = self.deck.pop()
        card.face_up = True
        card.drawn = True
        card.move_to(*self.layout.waste_slot)
        self.waste.append(card)
        logger.debug("Drew %r", card)
        return card

    def recycle_waste(self) -> int:
        """Move the whole waste back to an empty deck, keeping its order."""
        if self.deck:
            logger.debug("Recycle ignored: deck still holds %d cards", len(self.deck))
            return 0
        recycled = self.waste
        self.waste = []
        x, y = self.layout.deck_slot
        for card in recycled:
            card.face_up = False
            card.drawn = False
            card.move_to(x, y)
        self.deck.extend(recycled)
        logger.debug("Recycled %d cards from waste to deck", len(recycled))
        return len(recycled)

    # ---------- Moves ----------
    def can_place_on_lane(self, card: C.Card, index: int) -> bool:
        lane = self.lane(index)
        return can_stack_on_lane(card, lane[-1] if lane else None)

    def can_place_on_foundation(self, card: C.Card, index: int) -> bool:
        foundation = self.foundation(index)
        return can_stack_on_foundation(card, foundation[-1] if foundation else None)

    def place_on_lane(self, card: C.Card, index: int, origin: Zone) -> bool:
        lane = self.lane(index)
        if not self.can_place_on_lane(card, index):
            logger.debug("Rejected %r on lane %d (top %r)", card, index, lane[-1])
            self.return_to_origin(card, origin)
            return False
        self._stack_on_lane(card, index)
        logger.debug("Placed %r on lane %d", card, index)
        return True

    def place_on_foundation(self, card: C.Card, index: int, origin: Zone) -> bool:
        foundation = self.foundation(index)
        if not self.can_place_on_foundation(card, index):
            logger.debug("Rejected %r on foundation %d (top %r)", card, index, foundation[-1])
            self.return_to_origin(card, origin)
            return False
        self._stack_on_foundation(card, index)
        logger.debug("Placed %r on foundation %d", card, index)
        return True

    def _stack_on_lane(self, card: C.Card, index: int):
        lane = self.lane(index)
        if lane:
            top = lane[-1]
            card.move_to(top.x, top.y + self.layout.padding)
        else:
            card.move_to(*self.layout.lane_slot(index))
        lane.append(card)

    def _stack_on_foundation(self, card: C.Card, index: int):
        foundation = self.foundation(index)
        if foundation:
            top = foundation[-1]
            card.move_to(top.x, top.y)
        else:
            card.move_to(*self.layout.foundation_slot(index))
        foundation.append(card)

    def return_to_origin(self, card: C.Card, origin: Zone):
        """Put a lifted card back where it came from.

        The card was legally there before it was lifted, so lanes and
        foundations take it back without re-checking the stacking rules.
        """
        if origin.kind is ZoneKind.LANE:
            self._stack_on_lane(card, origin.index)
        elif origin.kind is ZoneKind.FOUNDATION:
            self._stack_on_foundation(card, origin.index)
        elif origin.kind is ZoneKind.WASTE:
            card.move_to(*self.layout.waste_slot)
            self.waste.append(card)
        else:
            raise InvalidOriginError(f"{card!r} cannot return to {origin!r}")
        logger.debug("Returned %r to %r", card, origin)
