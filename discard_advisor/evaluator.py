from __future__ import annotations

import logging
from typing import Any

from discard_advisor.candidates import evaluate_candidates
from discard_advisor.config import Settings, settings as default_settings
from discard_advisor.oracles import MahjongShantenOracle, ShantenOracle, UkeireValueScorer, ValueOracle, WinChecker
from discard_advisor.pool import build_pool
from discard_advisor.schemas import AnalysisContext, CurrentEvaluation, EvaluationResult
from discard_advisor.state import initialize_state
from discard_advisor.win_check import YakuWinChecker

logger = logging.getLogger(__name__)


def evaluate(
    context: AnalysisContext | dict[str, Any],
    *,
    settings: Settings | None = None,
    shanten_oracle: ShantenOracle | None = None,
    value_oracle: ValueOracle | None = None,
    win_checker: WinChecker | None = None,
) -> EvaluationResult:
    """Recommend a discard for the hand described by ``context``.

    Every call builds its own state, so concurrent calls under different
    rulesets do not interfere. Oracles default to the bundled shanten, value
    and yaku implementations.
    """
    settings = settings or default_settings
    if not isinstance(context, AnalysisContext):
        context = AnalysisContext.model_validate(context)

    state = initialize_state(context, settings)
    pool = build_pool(state)

    shanten_oracle = shanten_oracle or MahjongShantenOracle()
    value_oracle = value_oracle or UkeireValueScorer(shanten_oracle, settings.shanten_decay)
    win_checker = win_checker or YakuWinChecker(state.rules, state.round_wind, state.seat_wind)

    current = CurrentEvaluation(
        shanten=shanten_oracle.shanten(state.hand),
        value=value_oracle.value(state.hand, pool),
    )
    candidates, recommended = evaluate_candidates(
        state,
        pool,
        current.shanten,
        shanten_oracle,
        value_oracle,
        win_checker,
        workers=settings.candidate_workers,
    )
    logger.info(
        "Evaluated %s: shanten=%d candidates=%d recommended=%s",
        context.hand,
        current.shanten,
        len(candidates),
        recommended,
    )
    return EvaluationResult(
        current=current,
        candidates=candidates,
        recommended=recommended,
        dora=[tile.code for tile in state.dora],
        wall_remaining=pool.wall_remaining,
    )
