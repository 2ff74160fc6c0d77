from __future__ import annotations

from functools import lru_cache
from typing import Protocol

from mahjong.shanten import Shanten

from discard_advisor.pool import RemainingTilePool
from discard_advisor.tiles import ALL_TILES, Hand, Tile

COMPLETE = -1


class ShantenOracle(Protocol):
    def shanten(self, hand: Hand) -> int: ...


class ValueOracle(Protocol):
    def value(self, hand: Hand, pool: RemainingTilePool) -> float: ...


class WinChecker(Protocol):
    def is_winning_hand(self, hand: Hand) -> bool: ...


@lru_cache(maxsize=50000)
def _calculate_shanten(tiles_34: tuple[int, ...], closed_form: bool) -> int:
    # Shanten keeps scan state on the instance, so each call gets its own
    return Shanten().calculate_shanten(list(tiles_34), use_chiitoitsu=closed_form, use_kokushi=closed_form)


class MahjongShantenOracle:
    """Shanten from the ``mahjong`` package; melded tiles take part as fixed sets."""

    def shanten(self, hand: Hand) -> int:
        closed_form = not hand.melds
        return _calculate_shanten(tuple(hand.full_counts34()), closed_form)


def improving_tiles(hand: Hand, oracle: ShantenOracle, current: int | None = None) -> list[Tile]:
    """Tile types whose draw lowers the shanten of a waiting-state hand."""
    base = oracle.shanten(hand) if current is None else current
    held = hand.held_counts34()
    result: list[Tile] = []
    for tile in ALL_TILES:
        if held[tile.index] >= 4:
            continue
        if oracle.shanten(hand.draw(tile)) < base:
            result.append(tile)
    return result


class UkeireValueScorer:
    """Scores a hand by the live copies of the tiles that advance it.

    Each shanten step divides the score by ``shanten_decay``. A draw-state hand
    is worth its best discard.
    """

    def __init__(self, shanten_oracle: ShantenOracle | None = None, shanten_decay: float = 20.0) -> None:
        self._oracle = shanten_oracle or MahjongShantenOracle()
        self._decay = shanten_decay

    def value(self, hand: Hand, pool: RemainingTilePool) -> float:
        if hand.is_draw_state:
            return max((self.value(hand.discard(tile), pool) for tile in hand.discard_options()), default=0.0)
        shanten = self._oracle.shanten(hand)
        live = sum(pool.live(tile) for tile in improving_tiles(hand, self._oracle, shanten))
        return live / (self._decay ** max(shanten, 0))
