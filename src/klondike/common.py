# common.py - shared constants, cards and layout geometry for Klondike
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

# ---------- Configuration ----------
GREEN_TABLE = (2, 100, 40)
TABLE_BG = GREEN_TABLE

# Colors
BLACK = (20, 20, 20)
WHITE = (245, 245, 245)
RED = (200, 20, 20)
BLUE = (34, 96, 200)
LIGHT = (220, 220, 220)

CARD_RADIUS = 6

# Environment overrides, read by the entry point
ENV_CARD_SIZE = "KLONDIKE_CARD_SIZE"
ENV_ASSETS = "KLONDIKE_ASSETS"
ENV_SEED = "KLONDIKE_SEED"
ENV_LOG_LEVEL = "KLONDIKE_LOG_LEVEL"


class Suit(IntEnum):
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def color(self) -> str:
        return "red" if is_red(self) else "black"

    @property
    def file_name(self) -> str:
        return self.name.lower()


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def file_name(self) -> str:
        if Rank.TWO <= self <= Rank.TEN:
            return str(int(self))
        return self.name.lower()


SUITS = (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)
RANKS = tuple(Rank)

SUIT_TO_TEXT = {Suit.CLUBS: "♣", Suit.DIAMONDS: "♦", Suit.HEARTS: "♥", Suit.SPADES: "♠"}
RANK_TO_TEXT = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}
for _r in range(2, 11):
    RANK_TO_TEXT[Rank(_r)] = str(_r)


def is_red(suit):
    return suit in (Suit.DIAMONDS, Suit.HEARTS)


# ---------- Layout ----------
@dataclass(frozen=True)
class Layout:
    """Card size and spacing shared by card placement and hit testing.

    Columns and rows are half-open pixel ranges: a point on a column's right
    edge belongs to the next column.
    """

    card_w: int = 60
    card_h: int = 80
    padding: int = 20

    def lane_range(self, n: int) -> Tuple[int, int]:
        """Horizontal band of column ``n`` (1..7)."""
        step = self.card_w + self.padding
        return step * (n - 1) + self.padding, step * n + self.padding

    @property
    def top_row_range(self) -> Tuple[int, int]:
        return self.padding, self.padding + self.card_h

    @property
    def playfield_range(self) -> Tuple[int, int]:
        return self.padding * 2 + self.card_h, self.padding * 14 + self.card_h * 2

    def lane_x(self, n: int) -> int:
        return self.lane_range(n)[0]

    def lane_slot(self, n: int) -> Tuple[int, int]:
        """Top-left of the first card in tableau lane ``n``."""
        return self.lane_x(n), self.playfield_range[0]

    def foundation_slot(self, n: int) -> Tuple[int, int]:
        return self.lane_x(n), self.top_row_range[0]

    @property
    def waste_slot(self) -> Tuple[int, int]:
        return self.lane_x(6), self.top_row_range[0]

    @property
    def deck_slot(self) -> Tuple[int, int]:
        return self.lane_x(7), self.top_row_range[0]

    @property
    def screen_size(self) -> Tuple[int, int]:
        return self.lane_range(7)[1], self.playfield_range[1] + self.padding


_LAYOUT_PRESETS = {
    "Small": Layout(60, 80, 20),
    "Medium": Layout(100, 140, 20),
    "Large": Layout(150, 210, 28),
}

DEFAULT_LAYOUT = _LAYOUT_PRESETS["Small"]


def layout_for_size(size_name: Optional[str]) -> Layout:
    size_name = (size_name or "Small").strip().capitalize()
    return _LAYOUT_PRESETS.get(size_name, DEFAULT_LAYOUT)


def layout_from_env() -> Layout:
    return layout_for_size(os.environ.get(ENV_CARD_SIZE))


# ---------- Cards ----------
class Card:
    __slots__ = ("rank", "suit", "x", "y", "face_up", "drawn", "face")

    def __init__(self, rank, suit, x=0, y=0, face_up=False, face=None):
        self.rank = Rank(rank)
        self.suit = Suit(suit)
        self.x = x
        self.y = y
        self.face_up = face_up
        # Set while the card sits on the waste pile after a draw
        self.drawn = False
        # Opaque renderer handle, never inspected by the rules
        self.face = face

    @property
    def identity(self) -> Tuple[Rank, Suit]:
        return self.rank, self.suit

    @property
    def color(self) -> str:
        return self.suit.color

    def move_to(self, x, y):
        self.x = x
        self.y = y

    def contains(self, x, y, layout: Layout = DEFAULT_LAYOUT) -> bool:
        return (self.x <= x < self.x + layout.card_w) and (self.y <= y < self.y + layout.card_h)

    def __repr__(self):
        return f"{RANK_TO_TEXT[self.rank]}{SUIT_TO_TEXT[self.suit]}{'↑' if self.face_up else '↓'}"
