"""Pytest configuration and fixtures."""

import os

import pytest

from swapper.chains import ChainConfig
from tests.helpers.factories import make_chain_config


@pytest.fixture
def chain_config() -> ChainConfig:
    """Ethereum config with a $10k floor, WETH/USDC base tokens and test endpoints."""
    return make_chain_config()


@pytest.fixture(autouse=True)
def _clear_swapper_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep chain-config tests independent of the developer's environment."""
    for name in list(os.environ):
        if name.startswith("SWAPPER_"):
            monkeypatch.delenv(name, raising=False)
