from __future__ import annotations

import pytest

from tmctol.core.routing import is_viable, select_route
from tmctol.core.types import Route
from tmctol.errors import NoRoute, SlippageExceeded


def test_viability_requires_positive_output_meeting_minimum():
    assert is_viable(10, 0)
    assert is_viable(10, 10)
    assert not is_viable(9, 10)
    assert not is_viable(0, 0)


@pytest.mark.parametrize(
    "curve_out, pool_out, min_out, expected",
    [
        (100, 0, 0, Route.CURVE),
        (0, 100, 0, Route.POOL),
        (100, 90, 0, Route.CURVE),
        (90, 100, 0, Route.POOL),
        (100, 100, 0, Route.CURVE),
        # Curve below the minimum, pool above it.
        (90, 100, 95, Route.POOL),
        # Pool below the minimum, curve above it.
        (100, 90, 95, Route.CURVE),
    ],
)
def test_select_route(curve_out, pool_out, min_out, expected):
    assert select_route(curve_out, pool_out, min_out) is expected


def test_no_viable_route_with_pool_quote_is_slippage():
    with pytest.raises(SlippageExceeded):
        select_route(50, 60, 100)


def test_no_quotes_at_all_is_no_route():
    with pytest.raises(NoRoute):
        select_route(0, 0, 0)
    with pytest.raises(NoRoute):
        select_route(50, 0, 100)
