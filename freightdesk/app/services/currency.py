"""Fixed-rate currency conversion for report normalisation."""

from __future__ import annotations

import logging

from freightdesk.app.core.errors import CurrencyError

logger = logging.getLogger(__name__)

# 1 USD = 3.6725 AED (dirham peg). Compiled in, not fetched.
USD_TO_AED_RATE = 3.6725

REPORT_CURRENCIES: tuple[str, ...] = ("USD", "AED")

_KNOWN_PAIRS = frozenset({("USD", "AED"), ("AED", "USD")})


def normalize_currency(code: object) -> str:
    """Return the upper-cased ISO code or raise ``CurrencyError``."""
    if not isinstance(code, str):
        raise CurrencyError(code)
    value = code.strip().upper()
    if len(value) != 3 or not value.isalpha() or not value.isascii():
        raise CurrencyError(code)
    return value


def is_convertible(from_currency: str, to_currency: str) -> bool:
    """True when the pair is identical or has a known rate."""
    src = normalize_currency(from_currency)
    dst = normalize_currency(to_currency)
    return src == dst or (src, dst) in _KNOWN_PAIRS


def convert(amount: float, from_currency: str, to_currency: str) -> float:
    """Express ``amount`` in ``to_currency``.

    Pairs other than USD/AED pass through unchanged and are logged as a
    warning, since the amount is then still in its source currency.
    """
    src = normalize_currency(from_currency)
    dst = normalize_currency(to_currency)
    if src == dst:
        return amount
    if (src, dst) == ("USD", "AED"):
        return amount * USD_TO_AED_RATE
    if (src, dst) == ("AED", "USD"):
        return amount / USD_TO_AED_RATE
    logger.warning("No exchange rate for %s -> %s, passing amount through unconverted", src, dst)
    return amount
