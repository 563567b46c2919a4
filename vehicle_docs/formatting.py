"""es-ES formatting for amounts, dates and odometer readings."""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

CURRENCY_SYMBOL = "€"


def to_decimal(value) -> Decimal:
    """Coerce None, int, float, str or Decimal to Decimal (None -> 0)."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise along
    return Decimal(str(value))


def _group_thousands(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return ".".join(groups)


def format_currency(amount) -> str:
    """12100 -> '12.100,00 €'."""
    value = to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):.2f}".partition(".")
    return f"{sign}{_group_thousands(integer)},{fraction} {CURRENCY_SYMBOL}"


def format_number(value) -> str:
    """Integer with es-ES thousands separator: 45000 -> '45.000'."""
    number = int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if number < 0 else ""
    return sign + _group_thousands(str(abs(number)))


def format_km(value) -> str:
    return f"{format_number(value)} km"


def parse_date(value):
    """Accept a date, a datetime or an ISO 'YYYY-MM-DD' string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def format_date(value) -> str:
    """Long form used in body text: '05 de marzo de 2024'."""
    d = parse_date(value)
    if d is None:
        return ""
    return f"{d.day:02d} de {MONTHS[d.month - 1]} de {d.year}"


def format_short_date(value) -> str:
    d = parse_date(value)
    if d is None:
        return ""
    return d.strftime("%d/%m/%Y")
