import pytest

from discard_advisor.errors import InvalidHandError
from discard_advisor.tiles import Tile, TileSource, format_hand, parse_hand, parse_tile, parse_tile_runs


@pytest.mark.parametrize(
    "text",
    [
        "m123p456s789z1122z3",
        "m123p406s789z1122",
        "m123p456z1122,s7-89",
        "m11p456s78,z555=,m5555",
        "m11p456s78s9,z555=,m5555",
        "m123p456s789z1122z2",
    ],
)
def test_canonical_hand_round_trip(text):
    assert format_hand(parse_hand(text)) == text


def test_fourteenth_tile_is_tagged_as_drawn():
    hand = parse_hand("m123p456s789z11223")
    assert hand.drawn == Tile("z", 3)
    assert hand.concealed[-1].source is TileSource.just_drawn
    assert format_hand(hand) == "m123p456s789z1122z3"


def test_thirteen_tiles_have_no_drawn_tile():
    hand = parse_hand("m123p456s789z1122")
    assert hand.drawn is None
    assert not hand.is_draw_state
    assert hand.tile_count == 13


def test_red_five_sorts_before_ordinary_five():
    hand = parse_hand("p506m123s789z1122")
    assert format_hand(hand) == "m123p056s789z1122"
    assert Tile("p", 0).normal == Tile("p", 5)
    assert Tile("p", 0).index == Tile("p", 5).index


def test_melds_are_parsed():
    hand = parse_hand("m11p456s78s9,z555=,m5555")
    assert hand.tile_count == 14
    assert [m.open for m in hand.melds] == [True, False]
    assert hand.melds[1].is_quad
    assert not hand.is_closed
    assert sum(hand.full_counts34()) == 14


def test_closed_quad_keeps_hand_closed():
    hand = parse_hand("m123p456s789z1,m5555")
    assert hand.is_closed


def test_discard_options_skip_drawn_duplicate():
    hand = parse_hand("m123p456s789z1122z2")
    options = [t.code for t in hand.discard_options()]
    assert options == ["m1", "m2", "m3", "p4", "p5", "p6", "s7", "s8", "s9", "z1", "z2"]


def test_discard_removes_drawn_copy_first():
    hand = parse_hand("m123p456s789z1122z2")
    after = hand.discard(Tile("z", 2))
    assert after.drawn is None
    assert format_hand(after) == "m123p456s789z1122"


def test_discard_unknown_tile_fails():
    with pytest.raises(InvalidHandError):
        parse_hand("m123p456s789z1122").discard(Tile("m", 9))


def test_parse_tile_runs_tolerates_markers():
    tiles = parse_tile_runs("m1_2*p3-s4=z5+")
    assert [t.code for t in tiles] == ["m1", "m2", "p3", "s4", "z5"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "m123",
        "m123p456s789z112233",
        "m11111p456s789z11",
        "m123p456s789z1128",
        "m123p456s789z11x2",
        "m123p456z1122,s789",
        "m123p456z1122,s7-9",
        "m123p456z1122,z1-23",
    ],
)
def test_invalid_hands(text):
    with pytest.raises(InvalidHandError):
        parse_hand(text)


@pytest.mark.parametrize("code", ["z0", "z8", "m", "x1", "m10"])
def test_invalid_tile_codes(code):
    with pytest.raises(InvalidHandError):
        parse_tile(code)
