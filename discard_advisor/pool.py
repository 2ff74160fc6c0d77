from __future__ import annotations

import logging
from dataclasses import dataclass, field

from discard_advisor.schemas import RuleSet
from discard_advisor.state import AnalysisState
from discard_advisor.tiles import ALL_TILES, MAX_COPIES, RED_TILES, Tile

logger = logging.getLogger(__name__)

BASE_WALL_SIZE = 69
TILES_PER_TURN = 4


def live_wall_estimate(turn: int, seat_wind: int, base_wall_size: int = BASE_WALL_SIZE) -> int:
    """Tiles left in the live wall at ``turn`` for the given seat.

    Four-player ruleset: 136 tiles minus the 14-tile dead wall and the opening
    hands leaves 69 draws once the dealer holds 14; every turn takes one tile
    per seat and seats after the dealer have drawn one fewer.
    """
    return max(0, base_wall_size - (turn - 1) * TILES_PER_TURN - seat_wind)


def max_copies(tile: Tile, red_tiles_enabled: bool) -> int:
    if tile.is_red:
        return 1 if red_tiles_enabled else 0
    if red_tiles_enabled and tile.suit != "z" and tile.rank == 5:
        return MAX_COPIES - 1
    return MAX_COPIES


@dataclass(frozen=True)
class RemainingTilePool:
    counts: dict[str, int] = field(hash=False)
    wall_remaining: int = 0

    def get(self, code: str) -> int:
        return self.counts.get(code, 0)

    def live(self, tile: Tile) -> int:
        """Copies of ``tile`` still unseen, a numbered five including its red counterpart."""
        normal = tile.normal
        total = self.get(normal.code)
        if normal.suit != "z" and normal.rank == 5:
            total += self.get(f"{normal.suit}0")
        return total


def _pool_key(tile: Tile, rules: RuleSet) -> str:
    if tile.is_red and not rules.red_tiles_enabled:
        return tile.normal.code
    return tile.code


def build_pool(state: AnalysisState) -> RemainingTilePool:
    rules = state.rules
    counts = {tile.code: max_copies(tile, rules.red_tiles_enabled) for tile in ALL_TILES + RED_TILES}

    # each indicator is its own subtraction, later ones come from quad declarations
    seen = state.hand.all_tiles() + list(state.indicators) + list(state.discards)
    for tile in seen:
        counts[_pool_key(tile, rules)] -= 1

    for code, count in counts.items():
        if count < 0:
            logger.warning("More copies of %s visible than exist; clamping to 0", code)
            counts[code] = 0

    wall = live_wall_estimate(state.turn, state.seat_wind, rules.base_wall_size)
    return RemainingTilePool(counts=counts, wall_remaining=wall)
