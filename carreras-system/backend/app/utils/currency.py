"""Exact money and percentage handling.

Money is always an ``int`` number of cents. Percentages are ``Decimal``
values (``Decimal("10.5")`` means 10.5%) and are only turned into integer
basis points at the moment they are applied to an amount.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_NON_NUMERIC = re.compile(r"[^0-9.,]")
_SEPARATORS = re.compile(r"[.,]")

BASIS_POINTS_PER_UNIT = 10_000


def _split_by_last_sep(raw: object) -> tuple[int, str, str]:
    """Split a localized number into (sign, integer digits, fraction digits).

    The right-most ``.`` or ``,`` is taken as the decimal separator, so both
    ``"1.234,56"`` and ``"1,234.56"`` split into ``("1234", "56")``.
    """
    if raw is None:
        return 1, "", ""
    s = str(raw).strip()
    if not s:
        return 1, "", ""

    sign = 1
    if s[0] == "-":
        sign = -1
        s = s[1:]
    s = _NON_NUMERIC.sub("", s)

    last_sep = max(s.rfind(","), s.rfind("."))
    if last_sep == -1:
        return sign, s, ""
    int_digits = _SEPARATORS.sub("", s[:last_sep])
    frac_digits = _SEPARATORS.sub("", s[last_sep + 1:])
    return sign, int_digits, frac_digits


def parse_money_to_cents(raw: object) -> int:
    """Parse a free-form amount ("$ 1.234,5", "-20", "3,99") into cents.

    Never raises: empty input or an unusable remainder gives 0.
    """
    sign, int_digits, frac_digits = _split_by_last_sep(raw)
    int_safe = int_digits.lstrip("0") or "0"
    frac_safe = (frac_digits + "00")[:2]
    try:
        cents = int(int_safe + frac_safe)
    except ValueError:
        cents = 0
    return -cents if sign < 0 else cents


def parse_pct(raw: object) -> Decimal | None:
    """Parse a percentage ("10,5", "17", "1.2") into a Decimal.

    Returns None for empty/absent input so callers can tell "unspecified"
    apart from an explicit zero.
    """
    if raw is None or not str(raw).strip():
        return None
    sign, int_digits, frac_digits = _split_by_last_sep(raw)
    norm = f"{int_digits.lstrip('0') or '0'}.{frac_digits or '0'}"
    try:
        value = Decimal(norm)
    except InvalidOperation:
        return None
    return -value if sign < 0 else value


def parse_pct_or_default(raw: object, default: Decimal) -> Decimal | None:
    """Like parse_pct, but blank input falls back to ``default``."""
    if raw is None or not str(raw).strip():
        return default
    return parse_pct(raw)


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() gives the shortest repr, so 1.2 stays 1.2 instead of 1.19999...
        return Decimal(str(value))
    return Decimal(value)


def pct_to_basis_points(pct: object) -> int:
    """Convert a percentage to integer basis points, rounding half away from zero."""
    if pct is None:
        return 0
    scaled = _to_decimal(pct) * 100
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _div_toward_zero(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def apply_pct(base_cents: int, pct: object) -> int:
    """Return ``pct`` percent of ``base_cents``, truncated toward zero.

    Uses integer arithmetic only. A None percentage costs nothing.
    """
    if pct is None:
        return 0
    bp = pct_to_basis_points(pct)
    return _div_toward_zero(int(base_cents) * bp, BASIS_POINTS_PER_UNIT)


def format_cents(
    cents: int,
    decimal_sep: str = ",",
    thousands_sep: str = ".",
) -> str:
    """Format cents for display, e.g. 123456 -> '1.234,56'."""
    sign = "-" if cents < 0 else ""
    units, frac = divmod(abs(int(cents)), 100)
    digits = str(units)
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return f"{sign}{thousands_sep.join(groups)}{decimal_sep}{frac:02d}"
