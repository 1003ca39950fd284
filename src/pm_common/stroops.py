"""Integer arithmetic utilities for stroop-denominated amounts.

All stakes, pools and payouts are int stroops (1 XLM = 10_000_000 stroops).
Python ints are arbitrary precision, so i128 pool sizes never lose digits.
No float, no Decimal.
"""

import re

from src.pm_common.errors import InvalidAmountError

STROOPS_PER_XLM = 10_000_000
XLM_DECIMALS = 7

I128_MAX = 2**127 - 1
U64_MAX = 2**64 - 1

_DECIMAL_RE = re.compile(r"^([0-9]*)(?:\.([0-9]*))?$")


def xlm_to_stroops(xlm: str) -> int:
    """Convert a decimal XLM string to stroops: '1.5' -> 15000000.

    Digits beyond the 7th fractional place are truncated, not rounded.
    """
    text = xlm.strip()
    match = _DECIMAL_RE.match(text)
    if match is None or not any(ch in "0123456789" for ch in text):
        raise InvalidAmountError(f"not a decimal number: {xlm!r}")
    whole_str, frac_str = match.group(1), match.group(2) or ""
    whole = int(whole_str or "0") * STROOPS_PER_XLM
    frac = frac_str.ljust(XLM_DECIMALS, "0")[:XLM_DECIMALS]
    return whole + int(frac)


def stroops_to_xlm(stroops: int) -> str:
    """Convert stroops to a minimal decimal string: 12345678 -> '1.2345678', 10000000 -> '1'."""
    sign = "-" if stroops < 0 else ""
    whole, frac = divmod(abs(stroops), STROOPS_PER_XLM)
    if frac == 0:
        return f"{sign}{whole}"
    frac_str = f"{frac:0{XLM_DECIMALS}d}".rstrip("0")
    return f"{sign}{whole}.{frac_str}"


def stroops_to_display(stroops: int) -> str:
    """Human display: 15000000 -> '1.5 XLM'."""
    return f"{stroops_to_xlm(stroops)} XLM"


def validate_stake(amount: int) -> None:
    """Validate a purchase amount: positive integer that fits the contract's i128."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"expected integer stroops, got {type(amount).__name__}")
    if not (0 < amount <= I128_MAX):
        raise InvalidAmountError(f"must be between 1 and {I128_MAX} stroops, got {amount}")
