"""
Conversion between human-readable token amounts and on-chain smallest units.

All arithmetic stays in Python ``int``/``Decimal`` so values above 2**53
(common for 18-decimal tokens) keep every digit.
"""

import re
from decimal import Decimal

from tron_gateway.exceptions import InvalidAmountError

_HUMAN_AMOUNT_RE = re.compile(r"\d+(\.\d+)?", re.ASCII)
_RAW_AMOUNT_RE = re.compile(r"\d+", re.ASCII)


def _validate_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidAmountError(
            decimals, field="decimals", reason="must be a non-negative integer"
        )
    return decimals


def _to_plain_string(human: str | int | float | Decimal, field: str) -> str:
    """Render a human amount as a plain decimal string (no exponent, no sign)"""
    if isinstance(human, bool) or human is None:
        raise InvalidAmountError(human, field=field)
    if isinstance(human, str):
        return human.strip()
    if isinstance(human, int):
        return str(human)
    if isinstance(human, float):
        # repr gives the shortest round-tripping digits
        human = Decimal(repr(human))
    if isinstance(human, Decimal):
        if not human.is_finite():
            raise InvalidAmountError(human, field=field)
        return format(human, "f")
    raise InvalidAmountError(human, field=field)


def parse_human_amount(human: str | int | float | Decimal, field: str = "amount") -> str:
    """Return the amount as a plain decimal string or raise InvalidAmountError"""
    s = _to_plain_string(human, field)
    if not _HUMAN_AMOUNT_RE.fullmatch(s):
        raise InvalidAmountError(
            human, field=field, reason="expected digits with optional fraction"
        )
    return s


def to_smallest_units(
    human: str | int | float | Decimal,
    decimals: int,
    *,
    field: str = "amount",
    strict: bool = False,
) -> str:
    """Convert a human amount to an integer string in smallest units.

    The fractional part is zero-padded or truncated to exactly ``decimals``
    digits. Truncation is silent unless ``strict`` is set, in which case
    dropping a non-zero digit raises InvalidAmountError.

    Examples:
        >>> to_smallest_units("1.5", 6)
        '1500000'
        >>> to_smallest_units("1.23456789", 2)
        '123'
    """
    decimals = _validate_decimals(decimals)
    s = parse_human_amount(human, field)

    int_part, _, frac = s.partition(".")
    dropped = frac[decimals:]
    if strict and dropped.strip("0"):
        raise InvalidAmountError(
            human, field=field, reason=f"more than {decimals} fractional digits"
        )
    frac_padded = (frac + "0" * decimals)[:decimals]
    return str(int(int_part + frac_padded))


def from_smallest_units(raw: int | str, decimals: int, *, field: str = "raw") -> Decimal:
    """Convert an integer amount in smallest units to a human Decimal.

    Uses integer division and remainder only; the result is exact.

    Examples:
        >>> from_smallest_units(1500000, 6)
        Decimal('1.500000')
    """
    decimals = _validate_decimals(decimals)
    if isinstance(raw, bool):
        raise InvalidAmountError(raw, field=field, reason="must be a non-negative integer")
    if isinstance(raw, str):
        if not _RAW_AMOUNT_RE.fullmatch(raw.strip()):
            raise InvalidAmountError(raw, field=field, reason="must be a non-negative integer")
        raw = int(raw.strip())
    if not isinstance(raw, int) or raw < 0:
        raise InvalidAmountError(raw, field=field, reason="must be a non-negative integer")

    if decimals == 0:
        return Decimal(raw)
    base = 10**decimals
    whole, frac = divmod(raw, base)
    return Decimal(f"{whole}.{frac:0{decimals}d}")
