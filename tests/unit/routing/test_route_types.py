"""Tests for Route and Quote."""

import pytest

from swapper.routing import Quote, Route
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, make_route, make_v2_pool, make_v3_pool


class TestRoute:
    """Tests for Route."""

    def test_path_must_have_one_more_token_than_pools(self):
        with pytest.raises(ValueError, match="2 tokens for 2 pools"):
            Route(
                path=(TOKEN_A, TOKEN_B),
                pools=(make_v2_pool(TOKEN_A, TOKEN_B), make_v2_pool(TOKEN_B, TOKEN_C)),
            )

    def test_properties(self):
        ab = make_v2_pool(TOKEN_A, TOKEN_B, usd=100.0)
        bc = make_v3_pool(TOKEN_B, TOKEN_C, usd=250.0)
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], [ab, bc])

        assert route.hops == 2
        assert route.token_in == TOKEN_A
        assert route.token_out == TOKEN_C
        assert route.total_liquidity == 350.0
        assert route.pool_ids == (ab.id, bc.id)

    def test_describe(self):
        ab = make_v2_pool(TOKEN_A, TOKEN_B)
        bc = make_v3_pool(TOKEN_B, TOKEN_C, fee_tier=500)
        route = make_route([TOKEN_A, TOKEN_B, TOKEN_C], [ab, bc])

        assert route.describe() == {
            "path": [TOKEN_A, TOKEN_B, TOKEN_C],
            "pools": [
                {"id": ab.id, "kind": "v2"},
                {"id": bc.id, "kind": "v3", "feeTier": 500},
            ],
        }


class TestQuote:
    def test_to_public_uses_decimal_strings(self):
        route = make_route([TOKEN_A, TOKEN_B], [make_v2_pool(TOKEN_A, TOKEN_B)])
        quote = Quote(route=route, amount_out=10**30, gas_estimate=120_000)

        public = quote.to_public()

        assert public["amountOut"] == "1" + "0" * 30
        assert public["gasEstimate"] == "120000"
        assert public["route"] == route.describe()

    def test_is_valid(self):
        route = make_route([TOKEN_A, TOKEN_B], [make_v2_pool(TOKEN_A, TOKEN_B)])
        assert Quote(route=route, amount_out=1, gas_estimate=0).is_valid
        assert not Quote(route=route, amount_out=0, gas_estimate=0).is_valid
