from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Context, Decimal

from .logger import get_logger

logger = get_logger(__name__)

# Wide enough for uint256 balances (78 digits) times any realistic price.
DECIMAL_PRECISION = 256

_INTEGER_STRING = re.compile(r"[0-9]+")


def exact_context(min_precision: int = 0) -> Context:
    """Decimal context used for balance and value arithmetic."""
    return Context(
        prec=max(DECIMAL_PRECISION, min_precision), rounding=ROUND_HALF_UP
    )


def to_decimal(integer_string: str, decimals: int) -> Decimal:
    """Convert a smallest-unit integer string into a human-scale decimal.

    Args:
        integer_string: Unsigned base-10 integer, e.g. a balance in wei.
        decimals: Number of fractional digits of the asset's smallest unit.

    Returns:
        ``integer_string / 10**decimals`` rounded half-up to ``decimals``
        fractional digits. Malformed or empty input yields ``Decimal(0)``.

    Raises:
        ValueError: If ``decimals`` is negative.

    Notes:
        - Never goes through float, so balances above 2**53 stay exact.
        - ``to_decimal("1500000000000000000", 18) == Decimal("1.5")``
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    if not isinstance(integer_string, str) or not _INTEGER_STRING.fullmatch(
        integer_string
    ):
        logger.debug("Malformed balance %r, treating as zero", integer_string)
        return Decimal(0)

    ctx = exact_context(min_precision=len(integer_string) + 1)
    value = Decimal(integer_string).scaleb(-decimals, context=ctx)
    return value.quantize(Decimal(1).scaleb(-decimals), context=ctx)
