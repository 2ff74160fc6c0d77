from __future__ import annotations


class AdvisorError(Exception):
    """Base class for every error raised by the evaluation core."""


class InvalidHandError(AdvisorError):
    pass


class InvalidIndicatorError(AdvisorError):
    pass


class CandidateEvaluationError(AdvisorError):
    def __init__(self, tile: str, message: str) -> None:
        super().__init__(f"Failed to evaluate discard {tile}: {message}")
        self.tile = tile
