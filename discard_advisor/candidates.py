from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from discard_advisor.errors import CandidateEvaluationError
from discard_advisor.oracles import ShantenOracle, ValueOracle, WinChecker, improving_tiles
from discard_advisor.pool import RemainingTilePool
from discard_advisor.schemas import DiscardCandidate
from discard_advisor.state import AnalysisState
from discard_advisor.tiles import Tile

logger = logging.getLogger(__name__)

TENPAI = 0


def evaluate_candidate(
    tile: Tile,
    state: AnalysisState,
    pool: RemainingTilePool,
    shanten_oracle: ShantenOracle,
    value_oracle: ValueOracle,
    win_checker: WinChecker,
) -> DiscardCandidate:
    try:
        after = state.hand.discard(tile)
        shanten = shanten_oracle.shanten(after)
        value = value_oracle.value(after, pool)
        waits = improving_tiles(after, shanten_oracle, shanten)
        if shanten == TENPAI:
            waits = [wait for wait in waits if win_checker.is_winning_hand(after.draw(wait))]
    except Exception as exc:
        raise CandidateEvaluationError(tile.code, str(exc)) from exc

    return DiscardCandidate(
        tile=tile.code,
        shanten=shanten,
        value=value,
        waits=[wait.code for wait in waits],
        waits_remaining=sum(pool.live(wait) for wait in waits),
    )


def rank_candidates(candidates: list[DiscardCandidate]) -> tuple[list[DiscardCandidate], str | None]:
    # sorted() is stable, so equal values keep hand order
    ranked = sorted(candidates, key=lambda c: c.value, reverse=True)
    if not ranked:
        return [], None
    ranked = [c.model_copy(update={"is_recommended": i == 0}) for i, c in enumerate(ranked)]
    return ranked, ranked[0].tile


def evaluate_candidates(
    state: AnalysisState,
    pool: RemainingTilePool,
    current_shanten: int,
    shanten_oracle: ShantenOracle,
    value_oracle: ValueOracle,
    win_checker: WinChecker,
    workers: int = 1,
) -> tuple[list[DiscardCandidate], str | None]:
    if not state.hand.is_draw_state:
        logger.debug("Hand holds %d tiles; no discard to evaluate", state.hand.tile_count)
        return [], None

    options = state.hand.discard_options()
    slots: list[DiscardCandidate | None] = [None] * len(options)
    args = (state, pool, shanten_oracle, value_oracle, win_checker)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(evaluate_candidate, tile, *args) for tile in options]
            for i, future in enumerate(futures):
                slots[i] = future.result()
    else:
        for i, tile in enumerate(options):
            slots[i] = evaluate_candidate(tile, *args)

    for candidate in slots:
        logger.debug(
            "discard %s: shanten %d -> %d value=%.4f waits=%s (%d live)",
            candidate.tile,
            current_shanten,
            candidate.shanten,
            candidate.value,
            ",".join(candidate.waits),
            candidate.waits_remaining,
        )
    return rank_candidates([c for c in slots if c is not None])
