"""French number/price formatting (fr-FR, XAF)."""

from decimal import ROUND_HALF_EVEN, Decimal

# fr-FR groups thousands with a narrow no-break space
THOUSANDS_SEPARATOR = "\u202f"
CURRENCY_SEPARATOR = "\u00a0"
CURRENCY_SYMBOL = "FCFA"


def _group(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return THOUSANDS_SEPARATOR.join(groups)


def format_number(number: float | int | Decimal, max_fraction_digits: int = 3) -> str:
    """Format with thousands grouping and a decimal comma, e.g. ``1 234,5``."""
    value = Decimal(str(number))
    quantum = Decimal(1).scaleb(-max_fraction_digits)
    value = value.quantize(quantum, rounding=ROUND_HALF_EVEN)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):f}".partition(".")
    fraction = fraction.rstrip("0")
    text = _group(integer)
    if fraction:
        text = f"{text},{fraction}"
    return f"{sign}{text}"


def format_price(price: float | int | Decimal) -> str:
    """Format a price in whole FCFA, e.g. ``15 000 FCFA``."""
    value = Decimal(str(price)).quantize(Decimal(1), rounding=ROUND_HALF_EVEN)
    return f"{format_number(value, 0)}{CURRENCY_SEPARATOR}{CURRENCY_SYMBOL}"
