"""Domain models for portfolio aggregation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

NATIVE_IDENTITY = "native"

# price_id -> fiat code (lower case) -> price
PriceTable = dict[str, dict[str, Decimal]]


@dataclass(frozen=True)
class AssetDescriptor:
    """A tracked asset: native when ``contract_address`` is None."""

    display_name: str
    symbol: str
    contract_address: str | None
    price_id: str
    decimals: int

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError(
                f"decimals must be non-negative for {self.symbol}, got {self.decimals}"
            )

    @property
    def is_native(self) -> bool:
        return self.contract_address is None

    @property
    def identity(self) -> str:
        """Contract address (lower-cased) or ``"native"``."""
        if self.contract_address is None:
            return NATIVE_IDENTITY
        return self.contract_address.lower()


@dataclass(frozen=True)
class RawBalance:
    """Balance as returned by a balance provider, in the asset's smallest unit."""

    contract_address: str | None
    integer_string: str
    success: bool
    provider_message: str
    asset_index: int | None = None


@dataclass(frozen=True)
class AssetValuation:
    display_name: str
    symbol: str
    balance: Decimal
    fiat_value: Decimal
    price: Decimal = Decimal(0)
    price_available: bool = False


@dataclass(frozen=True)
class PortfolioSnapshot:
    """One complete aggregation result for one address."""

    address: str
    fiat_currency: str
    valuations: tuple[AssetValuation, ...]
    total_fiat_value: Decimal


def validate_tracked_assets(assets: Iterable[AssetDescriptor]) -> None:
    """Raise ValueError if price ids or asset identities repeat in the list."""
    assets = list(assets)
    duplicate_price_ids = sorted(
        pid for pid, n in Counter(a.price_id for a in assets).items() if n > 1
    )
    duplicate_identities = sorted(
        ident for ident, n in Counter(a.identity for a in assets).items() if n > 1
    )
    problems = []
    if duplicate_price_ids:
        problems.append(f"duplicate price ids: {', '.join(duplicate_price_ids)}")
    if duplicate_identities:
        problems.append(f"duplicate assets: {', '.join(duplicate_identities)}")
    if problems:
        raise ValueError(f"Invalid tracked asset list ({'; '.join(problems)})")


__all__ = [
    "NATIVE_IDENTITY",
    "AssetDescriptor",
    "AssetValuation",
    "PortfolioSnapshot",
    "PriceTable",
    "RawBalance",
    "validate_tracked_assets",
]
