"""Tests for candidate pool bucketing."""

from swapper.config import RouterConfig
from swapper.pools import sort_pools
from swapper.routing import select_candidates
from tests.helpers import (
    DAI,
    LINK,
    TOKEN_A,
    TOKEN_B,
    UNI,
    USDC,
    WBTC,
    WETH,
    make_chain_config,
    make_v2_pool,
    make_v3_pool,
)

MIN_LIQUIDITY = 10_000.0


def _select(pools, token_in=UNI, token_out=LINK, config=None, **chain_kwargs):
    chain_config = make_chain_config(min_liquidity_usd=MIN_LIQUIDITY, **chain_kwargs)
    ordered = sort_pools(pools, MIN_LIQUIDITY)
    if config is None:
        return select_candidates(ordered, token_in, token_out, chain_config)
    return select_candidates(ordered, token_in, token_out, chain_config, config)


class TestDirectSwapBucket:
    """Tests for the direct_swap bucket."""

    def test_capped_at_two_sorted_by_liquidity(self):
        pools = [
            make_v3_pool(UNI, LINK, usd=100_000, fee_tier=10000),
            make_v2_pool(LINK, UNI, usd=900_000),
            make_v3_pool(UNI, LINK, usd=500_000, fee_tier=3000),
        ]
        candidates = _select(pools)

        assert [p.usd_liquidity for p in candidates.direct_swap] == [900_000, 500_000]

    def test_overflow_direct_pool_can_land_in_later_bucket(self):
        third = make_v3_pool(UNI, LINK, usd=100_000)
        pools = [make_v2_pool(UNI, LINK, usd=900_000), make_v2_pool(UNI, LINK, usd=500_000), third]
        candidates = _select(pools)

        assert third not in candidates.direct_swap
        assert third in candidates.top_by_tvl

    def test_case_insensitive_token_match(self):
        pool = make_v2_pool(UNI, LINK, usd=100_000)
        candidates = _select([pool], token_in=UNI.upper().replace("0X", "0x"))

        assert candidates.direct_swap == [pool]


class TestBaseTokenBuckets:
    """Tests for the base_with_token_in/out buckets."""

    def test_endpoint_paired_with_base_token(self):
        uni_weth = make_v2_pool(UNI, WETH, usd=50_000)
        uni_dai = make_v2_pool(UNI, DAI, usd=25_000)  # DAI is not a base token here
        link_usdc = make_v3_pool(USDC, LINK, usd=40_000)

        candidates = _select([uni_weth, uni_dai, link_usdc])

        assert candidates.base_with_token_in == [uni_weth]
        assert candidates.base_with_token_out == [link_usdc]
        assert uni_dai in candidates.tvl_using_token_in

    def test_capped_at_five(self):
        bases = (WETH, USDC, DAI, WBTC, TOKEN_A, TOKEN_B)
        pools = [make_v2_pool(UNI, base, usd=20_000 + i) for i, base in enumerate(bases)]

        candidates = _select(pools, base_tokens=bases)

        assert len(candidates.base_with_token_in) == 5
        assert candidates.base_with_token_in[0].usd_liquidity == 20_005


class TestTvlBuckets:
    """Tests for top_by_tvl and tvl_using_token buckets."""

    def test_top_by_tvl_requires_three_times_minimum(self):
        shallow = make_v2_pool(WETH, DAI, usd=25_000)
        deep = make_v2_pool(WETH, DAI, usd=30_000)

        candidates = _select([shallow, deep])

        assert candidates.top_by_tvl == [deep]

    def test_tvl_using_tokens_capped_at_three(self):
        pools = [make_v2_pool(UNI, f"0x{i:040x}", usd=20_000 + i) for i in range(1, 6)]
        pools += [make_v2_pool(LINK, f"0x{i:040x}", usd=20_000 + i) for i in range(11, 16)]

        candidates = _select(pools)

        assert len(candidates.tvl_using_token_in) == 3
        assert len(candidates.tvl_using_token_out) == 3
        assert all(p.contains(UNI) for p in candidates.tvl_using_token_in)
        assert all(p.contains(LINK) for p in candidates.tvl_using_token_out)

    def test_custom_caps(self):
        pools = [make_v2_pool(UNI, LINK, usd=100_000 + i) for i in range(4)]
        candidates = _select(pools, config=RouterConfig(direct_swap_cap=3, top_by_tvl_cap=0))

        assert len(candidates.direct_swap) == 3
        assert candidates.top_by_tvl == []


class TestSecondHopBuckets:
    """Tests for second-hop expansion."""

    def test_expands_from_far_side_of_first_hop(self):
        uni_a = make_v2_pool(UNI, TOKEN_A, usd=20_000)
        a_b_1 = make_v2_pool(TOKEN_A, TOKEN_B, usd=15_000)
        a_b_2 = make_v2_pool(TOKEN_B, TOKEN_A, usd=14_000)
        a_b_3 = make_v2_pool(TOKEN_A, DAI, usd=13_000)
        link_b = make_v2_pool(LINK, TOKEN_B, usd=20_001)

        candidates = _select([uni_a, a_b_1, a_b_2, a_b_3, link_b])

        assert candidates.tvl_using_token_in == [uni_a]
        assert candidates.second_hop_from_token_in == [a_b_1, a_b_2]
        assert candidates.tvl_using_token_out == [link_b]
        assert candidates.second_hop_to_token_out == []
        assert a_b_3 not in candidates.all()

    def test_second_hop_skips_pools_already_assigned(self):
        uni_a = make_v2_pool(UNI, TOKEN_A, usd=20_000)
        link_a = make_v2_pool(LINK, TOKEN_A, usd=19_000)

        candidates = _select([uni_a, link_a])

        assert candidates.tvl_using_token_in == [uni_a]
        assert candidates.tvl_using_token_out == [link_a]
        assert candidates.second_hop_from_token_in == []


class TestCandidatePools:
    """Tests for bucket invariants."""

    def test_each_pool_in_at_most_one_bucket(self):
        pools = [
            make_v2_pool(UNI, LINK, usd=500_000),
            make_v3_pool(UNI, WETH, usd=400_000),
            make_v3_pool(WETH, LINK, usd=300_000),
            make_v2_pool(WETH, USDC, usd=5_000_000),
            make_v2_pool(UNI, DAI, usd=60_000),
            make_v2_pool(DAI, TOKEN_A, usd=50_000),
        ]
        candidates = _select(pools)
        ids = [p.id for p in candidates.all()]

        assert len(ids) == len(set(ids))
        assert len(ids) == len(pools)

    def test_summary_lists_buckets_in_priority_order(self):
        candidates = _select([make_v2_pool(UNI, LINK, usd=100_000)])

        assert list(candidates.summary()) == [
            "direct_swap",
            "base_with_token_in",
            "base_with_token_out",
            "top_by_tvl",
            "tvl_using_token_in",
            "tvl_using_token_out",
            "second_hop_from_token_in",
            "second_hop_to_token_out",
        ]
        assert candidates.summary()["direct_swap"] == 1

    def test_empty_pool_list(self):
        candidates = _select([])
        assert candidates.all() == []
