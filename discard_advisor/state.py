from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from discard_advisor.config import Settings, settings as default_settings
from discard_advisor.dora import next_dora_tile, parse_indicator
from discard_advisor.errors import InvalidHandError
from discard_advisor.schemas import AnalysisContext, RuleSet
from discard_advisor.tiles import Hand, Tile, parse_hand, parse_tile_runs

logger = logging.getLogger(__name__)

EAST = 0


@dataclass(frozen=True)
class AnalysisState:
    hand: Hand
    rules: RuleSet
    round_wind: int
    seat_wind: int
    indicators: tuple[Tile, ...]
    dora: tuple[Tile, ...]
    turn: int
    discards: tuple[Tile, ...]


def build_rules(context: AnalysisContext, settings: Settings) -> RuleSet:
    red = True if context.red_tiles_enabled is None else context.red_tiles_enabled
    return RuleSet(red_tiles_enabled=red, base_wall_size=settings.base_wall_size)


def _check_red_tiles(hand: Hand, rules: RuleSet) -> None:
    if not rules.red_tiles_enabled:
        return
    reds = Counter(tile.suit for tile in hand.all_tiles() if tile.is_red)
    for suit, count in reds.items():
        if count > 1:
            raise InvalidHandError(f"Only one red five exists per suit, got {count} for {suit}")


def initialize_state(context: AnalysisContext, settings: Settings | None = None) -> AnalysisState:
    settings = settings or default_settings
    rules = build_rules(context, settings)

    hand = parse_hand(context.hand)
    _check_red_tiles(hand, rules)

    indicators = tuple(parse_indicator(code) for code in context.indicator_tiles)
    discards: tuple[Tile, ...] = ()
    if context.discard_history:
        discards = tuple(parse_tile_runs(context.discard_history))

    state = AnalysisState(
        hand=hand,
        rules=rules,
        round_wind=EAST if context.round_wind is None else context.round_wind,
        seat_wind=EAST if context.seat_wind is None else context.seat_wind,
        indicators=indicators,
        dora=tuple(next_dora_tile(tile) for tile in indicators),
        turn=settings.default_turn if context.turn is None else context.turn,
        discards=discards,
    )
    logger.debug(
        "Initialized state: tiles=%d seat=%d turn=%d indicators=%d discards=%d",
        hand.tile_count,
        state.seat_wind,
        state.turn,
        len(indicators),
        len(discards),
    )
    return state
