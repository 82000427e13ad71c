from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from app.core.config import settings

getcontext().prec = 28
CENTS = Decimal("0.01")

# fits a signed 64-bit column with room for sums
MAX_AMOUNT_CENTS = 10 ** 15


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_cents(value) -> int:
    """
    Convert a major-unit amount (2.5, "2.50", Decimal("2.5")) to integer cents,
    rounding half away from zero.

    Anything that is not a finite number, or is too large to represent,
    becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    try:
        d = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return 0

    if not d.is_finite():
        return 0

    try:
        return int((d * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except ArithmeticError:
        # more digits than the decimal context can hold
        return 0


def coerce_cents(value) -> int:
    # stored minor-unit values: ints pass through, anything else is rounded
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not _is_number(value):
        return 0
    try:
        return to_cents(Decimal(str(value)) / 100)
    except ArithmeticError:
        return 0


def _is_number(value) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return Decimal(str(value)).is_finite()
    except (InvalidOperation, ValueError):
        return False


def is_storable_amount(value: Decimal) -> bool:
    try:
        return value.is_finite() and abs(value) * 100 <= MAX_AMOUNT_CENTS
    except ArithmeticError:
        return False


def from_cents(cents: int) -> Decimal:
    return qround(Decimal(cents) / 100)


def format_amount(cents: int, symbol: str | None = None) -> str:
    if symbol is None:
        symbol = settings.CURRENCY_SYMBOL
    return f"{symbol}{from_cents(abs(cents))}"
