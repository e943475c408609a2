from __future__ import annotations

import dataclasses

import pytest

from etherfolio.constants import ETH_MAINNET_TRACKED_ASSETS
from etherfolio.domain import AssetDescriptor, validate_tracked_assets

TOKEN = "0x35fA164735182de50811E8e2E824cFb9B6118ac2"


def test_native_asset_identity():
    asset = AssetDescriptor("Ethereum", "ETH", None, "ethereum", 18)

    assert asset.is_native is True
    assert asset.identity == "native"


def test_token_identity_is_lower_cased_contract():
    asset = AssetDescriptor("weETH", "weETH", TOKEN, "ether-fi-staked-eth", 18)

    assert asset.is_native is False
    assert asset.identity == TOKEN.lower()


def test_descriptor_rejects_negative_decimals():
    with pytest.raises(ValueError, match="decimals must be non-negative"):
        AssetDescriptor("Bad", "BAD", None, "bad", -1)


def test_descriptor_is_immutable():
    asset = AssetDescriptor("Ethereum", "ETH", None, "ethereum", 18)

    with pytest.raises(dataclasses.FrozenInstanceError):
        asset.decimals = 6  # type: ignore[misc]


def test_default_tracked_assets_are_valid():
    validate_tracked_assets(ETH_MAINNET_TRACKED_ASSETS)
    assert [a.symbol for a in ETH_MAINNET_TRACKED_ASSETS] == ["ETH", "weETH", "eETH"]


def test_duplicate_contract_addresses_differing_in_case_are_rejected():
    assets = [
        AssetDescriptor("A", "A", TOKEN, "a", 18),
        AssetDescriptor("B", "B", TOKEN.lower(), "b", 18),
    ]

    with pytest.raises(ValueError, match=f"duplicate assets: {TOKEN.lower()}"):
        validate_tracked_assets(assets)


def test_two_native_assets_are_rejected():
    assets = [
        AssetDescriptor("A", "A", None, "a", 18),
        AssetDescriptor("B", "B", None, "b", 18),
    ]

    with pytest.raises(ValueError, match="duplicate assets: native"):
        validate_tracked_assets(assets)
