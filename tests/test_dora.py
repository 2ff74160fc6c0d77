import pytest

from discard_advisor.dora import resolve_dora, resolve_dora_list
from discard_advisor.errors import InvalidIndicatorError


@pytest.mark.parametrize(
    ("indicator", "expected"),
    [
        ("s3", "s4"),
        ("m9", "m1"),
        ("p0", "p6"),
        ("p4", "p5"),
        ("z1", "z2"),
        ("z4", "z1"),
        ("z5", "z6"),
        ("z7", "z5"),
    ],
)
def test_resolve_dora(indicator, expected):
    assert resolve_dora(indicator) == expected


def test_additional_indicators_resolve_in_order():
    assert resolve_dora_list(["z4", "s3", "z7"]) == ["z1", "s4", "z5"]


@pytest.mark.parametrize("indicator", ["z0", "z8", "q1", "", "3s"])
def test_invalid_indicator(indicator):
    with pytest.raises(InvalidIndicatorError):
        resolve_dora(indicator)
