import pytest

from klondike import common as C
from klondike.board import DECK, NO_ZONE, WASTE, Zone
from klondike.controller import resolve_zone

LAYOUT = C.DEFAULT_LAYOUT  # 60x80 cards, 20px padding


@pytest.mark.parametrize(
    "pos, zone",
    [
        ((30, 30), Zone.foundation(1)),
        ((100, 30), Zone.foundation(2)),
        ((179, 99), Zone.foundation(2)),
        ((200, 60), Zone.foundation(3)),
        ((300, 60), Zone.foundation(4)),
        ((350, 30), NO_ZONE),
        ((430, 30), WASTE),
        ((510, 30), DECK),
        ((30, 140), Zone.lane(1)),
        ((350, 300), Zone.lane(5)),
        ((430, 300), Zone.lane(6)),
        ((579, 439), Zone.lane(7)),
        ((19, 30), NO_ZONE),
        ((580, 30), NO_ZONE),
        ((30, 19), NO_ZONE),
        ((30, 110), NO_ZONE),
        ((30, 440), NO_ZONE),
        ((-5, -5), NO_ZONE),
    ],
)
def test_resolve_zone(pos, zone):
    assert resolve_zone(pos[0], pos[1], LAYOUT) == zone


def test_resolve_zone_is_deterministic():
    for pos in [(30, 30), (430, 30), (250, 250), (600, 600)]:
        assert resolve_zone(*pos, LAYOUT) == resolve_zone(*pos, LAYOUT)


def test_zone_regions_follow_column_and_row_bands():
    width, height = LAYOUT.screen_size
    seen = {}
    for x in range(0, width + 20, 5):
        for y in range(0, height + 20, 5):
            zone = resolve_zone(x, y, LAYOUT)
            if zone == NO_ZONE:
                continue
            seen.setdefault(zone, []).append((x, y))

    expected = {Zone.foundation(n) for n in range(1, 5)} | {Zone.lane(n) for n in range(1, 8)} | {WASTE, DECK}
    assert set(seen) == expected

    for zone, points in seen.items():
        xs = {x for x, _ in points}
        ys = {y for _, y in points}
        column = zone.index if zone.index else (6 if zone == WASTE else 7)
        lo, hi = LAYOUT.lane_range(column)
        assert all(lo <= x < hi for x in xs)
        band = LAYOUT.playfield_range if zone.kind.name == "LANE" else LAYOUT.top_row_range
        assert all(band[0] <= y < band[1] for y in ys)


@pytest.mark.parametrize("size", ["Small", "Medium", "Large"])
def test_card_slots_resolve_to_their_own_zones(size):
    layout = C.layout_for_size(size)
    assert resolve_zone(*layout.deck_slot, layout) == DECK
    assert resolve_zone(*layout.waste_slot, layout) == WASTE
    for n in range(1, 5):
        assert resolve_zone(*layout.foundation_slot(n), layout) == Zone.foundation(n)
    for n in range(1, 8):
        x, y = layout.lane_slot(n)
        assert resolve_zone(x, y, layout) == Zone.lane(n)
        # Deepest possible cascade still lands inside the lane
        assert resolve_zone(x + layout.card_w - 1, y + 11 * layout.padding, layout) == Zone.lane(n)


def test_unknown_card_size_falls_back_to_default():
    assert C.layout_for_size("Huge") == C.DEFAULT_LAYOUT
    assert C.layout_for_size(None) == C.DEFAULT_LAYOUT
    assert C.layout_for_size("medium") == C.Layout(100, 140, 20)
