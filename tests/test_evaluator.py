import pytest

from discard_advisor.errors import InvalidHandError, InvalidIndicatorError
from discard_advisor.evaluator import evaluate


def test_complete_hand_reports_agari():
    result = evaluate({"hand": "m123p456s789z11122"})
    assert result.current.shanten == -1
    assert result.candidates
    assert result.recommended is not None


def test_dora_from_indicator():
    assert evaluate({"hand": "m123p456s789z11223", "indicatorTiles": ["s3"]}).dora == ["s4"]


def test_north_indicator_wraps_to_east():
    assert evaluate({"hand": "m123p456s789z11223", "indicator_tiles": ["z4"]}).dora == ["z1"]


def test_quad_indicators_resolve_in_order():
    result = evaluate({"hand": "m123p456s789z11223", "indicator_tiles": ["z4", "m9"]})
    assert result.dora == ["z1", "m1"]


def test_defaults_seat_east_turn_seven():
    assert evaluate({"hand": "m123p456s789z11223"}).wall_remaining == 45


def test_invalid_hand_raises():
    with pytest.raises(InvalidHandError):
        evaluate({"hand": "m123p456"})


def test_second_red_five_in_a_suit_is_rejected():
    with pytest.raises(InvalidHandError):
        evaluate({"hand": "m123p00s789z112233"})


def test_red_fives_allowed_when_rule_disabled():
    result = evaluate({"hand": "m123p00s789z112233", "red_tiles_enabled": False})
    assert result.recommended is not None


def test_invalid_indicator_raises():
    with pytest.raises(InvalidIndicatorError):
        evaluate({"hand": "m123p456s789z11223", "indicator_tiles": ["z9"]})


def test_evaluation_is_deterministic():
    payload = {"hand": "m23p456s789z1122z3m5", "discard_history": "m1p9"}
    first = evaluate(payload)
    second = evaluate(payload)
    assert first.model_dump_json() == second.model_dump_json()


def test_current_value_is_best_candidate_value():
    result = evaluate({"hand": "m123p456s789z11223"})
    assert result.current.value == max(c.value for c in result.candidates)


def test_open_hand_keeps_waits_that_win_by_concealed_triplets():
    result = evaluate({"hand": "p111999s5599z7,m1-23"})
    candidate = next(c for c in result.candidates if c.tile == "z7")
    assert candidate.shanten == 0
    assert candidate.waits == ["s5", "s9"]
    assert candidate.waits_remaining == 4


def test_invalid_discard_history_raises():
    with pytest.raises(InvalidHandError):
        evaluate({"hand": "m123p456s789z11223", "discard_history": "z8"})
