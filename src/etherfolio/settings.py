"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from web3 import Web3

from .constants import (
    COINGECKO_API_URL,
    DEFAULT_FIAT_CURRENCY,
    ETH_MAINNET_TRACKED_ASSETS,
    ETHERSCAN_API_V2_URL,
    MAINNET_CHAIN_ID,
)
from .domain import AssetDescriptor, validate_tracked_assets

load_dotenv()

SECRET_FIELDS = {"etherscan_api_key", "coingecko_api_key"}


class TrackedAssetSettings(BaseModel):
    """One tracked asset as written in the config file."""

    display_name: str
    symbol: str
    contract_address: str | None = None
    price_id: str
    decimals: int = Field(default=18, ge=0)

    model_config = ConfigDict(extra="ignore")

    @field_validator("contract_address")
    @classmethod
    def checksum_contract_address(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not Web3.is_address(v):
            raise ValueError(f"Invalid contract address: {v}")
        return Web3.to_checksum_address(v)

    def to_descriptor(self) -> AssetDescriptor:
        return AssetDescriptor(
            display_name=self.display_name,
            symbol=self.symbol,
            contract_address=self.contract_address,
            price_id=self.price_id,
            decimals=self.decimals,
        )


def _default_tracked_assets() -> list[TrackedAssetSettings]:
    return [
        TrackedAssetSettings(
            display_name=asset.display_name,
            symbol=asset.symbol,
            contract_address=asset.contract_address,
            price_id=asset.price_id,
            decimals=asset.decimals,
        )
        for asset in ETH_MAINNET_TRACKED_ASSETS
    ]


class PortfolioSettings(BaseSettings):
    """Single source of truth for configuration. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with ETHERFOLIO_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- providers ---
    etherscan_api_key: SecretStr | None = None
    coingecko_api_key: SecretStr | None = None
    etherscan_api_url: str = ETHERSCAN_API_V2_URL
    coingecko_api_url: str = COINGECKO_API_URL
    chain_id: int = Field(default=MAINNET_CHAIN_ID, gt=0)

    # --- valuation ---
    fiat_currency: str = DEFAULT_FIAT_CURRENCY
    tracked_assets: list[TrackedAssetSettings] = Field(
        default_factory=_default_tracked_assets
    )

    # --- timeouts (seconds) ---
    request_timeout: float = Field(
        default=10.0, gt=0, description="Timeout for a single HTTP request."
    )
    fetch_timeout: float = Field(
        default=15.0, gt=0, description="Timeout for one balance or price fetch."
    )
    global_timeout_seconds: float | None = Field(
        default=60.0,
        description="Timeout for a whole portfolio run; None or <= 0 disables it.",
    )

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ETHERFOLIO_",
        env_file=".env",
        extra="ignore",  # ignore unknown keys in env/config file
    )

    @field_validator(*SECRET_FIELDS, mode="before")
    @classmethod
    def wrap_secrets(cls, v: Any) -> SecretStr | None:
        """Wrap string secrets in SecretStr."""
        if v is None or isinstance(v, SecretStr):
            return v
        if v == "":
            return None
        return SecretStr(v)

    @field_validator("fiat_currency")
    @classmethod
    def normalize_fiat_currency(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("fiat_currency must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def validate_tracked_asset_list(self) -> "PortfolioSettings":
        """Reject empty or ambiguous tracked asset lists."""
        if not self.tracked_assets:
            raise ValueError("tracked_assets must contain at least one asset")
        validate_tracked_assets(self.assets)
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get("ETHERFOLIO_CONFIG")
        cfg_path = Path(env_cfg) if env_cfg else None

        class TomlConfigSource(PydanticBaseSettingsSource):
            def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
                super().__init__(settings_cls)
                self._path = path

            def get_field_value(
                self, field: Any, field_name: str
            ) -> tuple[Any, str, bool]:
                return None, "", False

            def __call__(self) -> dict[str, Any]:
                if not self._path:
                    local_config = Path("etherfolio.toml")
                    user_config = Path.home() / ".config" / "etherfolio" / "config.toml"
                    if local_config.exists():
                        self._path = local_config
                    elif user_config.exists():
                        self._path = user_config
                    else:
                        return {}

                if not self._path.exists():
                    return {}

                with self._path.open("rb") as f:
                    data = tomllib.load(f)  # supports top-level or [etherfolio]
                body = data.get("etherfolio", data)
                if not isinstance(body, dict):
                    return {}

                for key in SECRET_FIELDS:
                    if key in body:
                        raise ValueError(
                            f"Security violation: '{key}' found in TOML config file. "
                            f"Secrets must only be provided via environment variables or CLI flags."
                        )

                return body

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
            file_secret_settings,  # optional secrets dir
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the config as a dict with secrets redacted."""
        data = self.model_dump(mode="json")
        for key in SECRET_FIELDS:
            if getattr(self, key):
                data[key] = "***redacted***"
        return data

    @property
    def assets(self) -> list[AssetDescriptor]:
        """Tracked assets as domain descriptors, in configured order."""
        return [asset.to_descriptor() for asset in self.tracked_assets]

    @property
    def etherscan_api_key_required(self) -> str:
        """Get the Etherscan API key, raising ValueError if not set."""
        if self.etherscan_api_key is None:
            raise ValueError("etherscan_api_key must be configured")
        return self.etherscan_api_key.get_secret_value()
