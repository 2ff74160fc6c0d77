from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from discard_advisor.config import settings
from discard_advisor.dora import resolve_dora_list
from discard_advisor.errors import AdvisorError
from discard_advisor.evaluator import evaluate
from discard_advisor.schemas import AnalysisContext, DoraRequest, DoraResponse, EvaluationResult

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Mahjong Discard Advisor", version="0.1.0")


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Mahjong Discard Advisor API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/v1/evaluate", response_model=EvaluationResult)
def evaluate_hand(context: AnalysisContext) -> EvaluationResult:
    try:
        return evaluate(context, settings=settings)
    except AdvisorError as exc:
        logger.warning("Rejected analysis for %s: %s", context.hand, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/api/v1/dora", response_model=DoraResponse)
def dora(req: DoraRequest) -> DoraResponse:
    try:
        return DoraResponse(dora=resolve_dora_list(req.indicator_tiles))
    except AdvisorError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
