"""Preflight checks before any network call is made."""

from __future__ import annotations

from web3 import Web3

from ..domain import validate_tracked_assets
from ..state import AppState


class PreflightError(ValueError):
    """Raised when the run cannot start with the given input or settings."""


def run_preflight(state: AppState, address: str) -> str:
    """Validate the wallet address and provider configuration.

    Args:
        state: Application state containing settings and logger
        address: Wallet address as entered by the user

    Returns:
        The EIP-55 checksummed address.

    Raises:
        PreflightError: If any check fails
    """
    s = state.settings
    log = state.logger

    problems: list[str] = []
    candidate = address.strip()
    if not Web3.is_address(candidate):
        problems.append(f"'{address}' is not a valid wallet address")
    if s.etherscan_api_key is None:
        problems.append(
            "etherscan_api_key is not configured (set ETHERFOLIO_ETHERSCAN_API_KEY)"
        )
    try:
        validate_tracked_assets(s.assets)
    except ValueError as e:
        problems.append(str(e))

    if problems:
        for problem in problems:
            log.error("Preflight: %s", problem)
        raise PreflightError(f"Preflight failed: {'; '.join(problems)}")

    checksummed = Web3.to_checksum_address(candidate)
    log.debug("Preflight passed for %s", checksummed)
    return checksummed
