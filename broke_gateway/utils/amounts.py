"""Parsing of user-entered currency amounts"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from broke_gateway.domain.exceptions import InvalidAmountError

_CURRENCY_SYMBOLS = "$€£¥₹"
_GROUPING_SEPARATOR = ","


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a currency amount typed by a user into an exact Decimal.

    Accepts plain numbers ("12.5"), grouped numbers ("1,234.50") and
    amounts carrying a currency symbol ("$19.99"). Returns None when
    nothing numeric is left after cleaning.

    Example:
        "$1,234.50" → Decimal("1234.50")
        "abc"       → None
    """
    trimmed = text.strip()
    if not trimmed:
        return None

    cleaned = "".join(ch for ch in trimmed if ch not in _CURRENCY_SYMBOLS and not ch.isspace())
    cleaned = cleaned.replace(_GROUPING_SEPARATOR, "")

    # Keep digits, a single decimal point and a leading sign
    cleaned = re.sub(r"[^0-9.\-]", "", cleaned)
    sign = "-" if cleaned.startswith("-") else ""
    body = cleaned.replace("-", "")
    if body.count(".") > 1:
        return None

    try:
        value = Decimal(sign + body)
    except InvalidOperation:
        return None

    if not value.is_finite():
        return None
    return value


def require_amount(raw: object) -> Decimal:
    """Amount from a number or user text; raises InvalidAmountError when unparseable"""
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        value = parse_amount(raw)
    else:
        value = None

    if value is None or not value.is_finite():
        raise InvalidAmountError(f"Cannot parse amount: {raw!r}")
    return value
