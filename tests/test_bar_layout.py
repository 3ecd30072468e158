import math

import pytest

from src.models.bar_layout import resolve_bar_layout, single_bar_area
from src.models.errors import InvalidInputError


def test_single_bar_area():
    assert single_bar_area(20) == pytest.approx(math.pi * 100)


def test_no_diameter_gives_no_layout():
    assert resolve_bar_layout(900.0, None) is None


def test_rounds_up():
    layout = resolve_bar_layout(923.8, 16)
    assert layout.number == 5
    assert layout.area == pytest.approx(5 * single_bar_area(16))


def test_at_least_two_bars():
    layout = resolve_bar_layout(50.0, 25)
    assert layout.number == 2
    assert layout.area > 50.0


def test_exact_multiple():
    area = 3 * single_bar_area(12)
    assert resolve_bar_layout(area, 12).number == 3


@pytest.mark.parametrize("As_req", [100.0, 450.0, 923.8, 2500.0])
def test_smaller_diameter_never_needs_fewer_bars(As_req):
    counts = [resolve_bar_layout(As_req, d).number for d in (32, 25, 20, 16, 12, 10)]
    assert counts == sorted(counts)
    for d in (32, 25, 20, 16, 12, 10):
        layout = resolve_bar_layout(As_req, d)
        assert layout.area >= As_req
        assert layout.number >= 2


def test_non_positive_diameter_raises():
    with pytest.raises(InvalidInputError):
        resolve_bar_layout(500.0, 0)


def test_to_dict():
    assert resolve_bar_layout(100.0, 10).to_dict() == {
        "number": 2,
        "diameter": 10,
        "area": pytest.approx(2 * single_bar_area(10)),
    }
