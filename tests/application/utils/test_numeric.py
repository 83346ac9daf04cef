import pytest

from vocab_srs.application.utils.numeric import clamp_easiness, round_half_up, round_to_cents


@pytest.mark.parametrize(
    "value, expected",
    [
        (4.5, 5),
        (2.5, 3),
        (0.5, 1),
        (2.4999, 2),
        (6.6000000000000005, 7),
        (7.0, 7),
        (0.0, 0),
    ],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
    assert isinstance(round_half_up(value), int)


def test_round_to_cents_rounds_ties_up():
    # 2.125 is exact in binary; round() would give 2.12
    assert round_to_cents(2.125) == 2.13


def test_round_to_cents_uses_exact_binary_value():
    # 1.005 is stored slightly below 1.005
    assert round_to_cents(1.005) == 1.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.6, 2.5),
        (3.1, 2.5),
        (1.0, 1.3),
        (1.96, 1.96),
        (2.5 - 0.32, 2.18),
    ],
)
def test_clamp_easiness(value, expected):
    assert clamp_easiness(value) == expected
