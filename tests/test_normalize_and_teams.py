import math

import pytest

from rook.normalize import coerce_number, normalize, round_to_step
from rook.teams import SEATS, Team, team_of


def test_team_mapping_pairs_even_and_odd_seats():
    assert [team_of(seat) for seat in SEATS] == [Team.A, Team.B, Team.A, Team.B]
    for seat in SEATS:
        assert (team_of(seat) is Team.A) == (seat % 2 == 0)
    assert Team.A.other is Team.B
    assert Team.B.other is Team.A


def test_normalize_rounds_to_nearest_five():
    assert normalize(123) == 125
    assert normalize(122) == 120
    assert normalize(122.5) == 125
    assert normalize(117.5) == 120
    assert normalize("87") == 85


def test_normalize_clamps_into_range():
    assert normalize(500) == 180
    assert normalize(-40) == 0
    assert normalize(72, minimum=80, maximum=120) == 80
    assert normalize(float("inf")) == 180
    assert normalize(float("-inf")) == 0


@pytest.mark.parametrize("junk", [None, "", "abc", float("nan"), object(), [1, 2]])
def test_normalize_treats_junk_as_zero(junk):
    assert normalize(junk) == 0


def test_normalize_properties():
    for tenth in range(-100, 1900, 7):
        value = tenth / 10
        result = normalize(value)
        assert result % 5 == 0
        assert normalize(result) == result
        if 0 <= value <= 180:
            assert abs(result - value) <= 2.5


def test_round_to_step_rounds_halves_away_from_zero():
    assert round_to_step(12.5) == 15
    assert round_to_step(-12.5) == -15
    assert round_to_step(-2) == 0


def test_coerce_number():
    assert coerce_number(" 42 ") == 42
    assert coerce_number(True) == 1
    assert coerce_number(7.25) == 7.25
    assert math.isinf(coerce_number("inf"))
