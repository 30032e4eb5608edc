from decimal import Decimal, ROUND_HALF_UP


def to_decimal(value) -> Decimal:
    """Coerce stored amounts (Decimal, str, float, None) to Decimal. Missing is 0."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value) -> int:
    # round() would send 4.5 to 4; amounts shown to drivers round halves up
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
