from decimal import Decimal, ROUND_HALF_UP, getcontext

getcontext().prec = 28

CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Balances within +/- EPSILON of zero count as settled; share sums within
# EPSILON of the expense amount count as equal.
EPSILON = Decimal("0.01")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_money(value) -> Decimal:
    """Coerce a DB value, float, int or string to a 2-place Decimal."""
    if value is None:
        return ZERO.quantize(CENTS)
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return qround(value)
