from __future__ import annotations

from discard_advisor.errors import InvalidHandError, InvalidIndicatorError
from discard_advisor.tiles import Tile, parse_tile

WIND_CYCLE = (1, 2, 3, 4)
DRAGON_CYCLE = (5, 6, 7)


def parse_indicator(code: str) -> Tile:
    try:
        return parse_tile(code)
    except InvalidHandError as exc:
        raise InvalidIndicatorError(f"Invalid indicator tile: {code}") from exc


def next_dora_tile(indicator: Tile) -> Tile:
    """Return the tile promoted by ``indicator``; a red five promotes like an ordinary five."""
    if indicator.suit != "z":
        n = indicator.number
        return Tile(indicator.suit, 1 if n == 9 else n + 1)
    order = WIND_CYCLE if indicator.rank in WIND_CYCLE else DRAGON_CYCLE
    return Tile("z", order[(order.index(indicator.rank) + 1) % len(order)])


def resolve_dora(indicator: str) -> str:
    return next_dora_tile(parse_indicator(indicator)).code


def resolve_dora_list(indicators: list[str]) -> list[str]:
    return [resolve_dora(code) for code in indicators]
