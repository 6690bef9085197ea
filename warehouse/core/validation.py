from decimal import Decimal, InvalidOperation

from warehouse.core.errors import InvalidVolume, ValidationError


def require_text(value, field):
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError("{} is required".format(field))
    return text


def optional_text(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_positive_price(value, field="cost_price"):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("{} must be a number".format(field))
    if not price.is_finite() or price <= 0:
        raise ValidationError("{} must be greater than zero".format(field))
    return price


def _whole_number(value):
    """``value`` as an int when it is one (or an integer string), else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not isinstance(value, str) and number != value:
        return None
    return number


def require_int(value, field, *, minimum=0):
    number = _whole_number(value)
    if number is None:
        raise ValidationError("{} must be an integer".format(field))
    if number < minimum:
        raise ValidationError("{} must be at least {}".format(field, minimum))
    return number


def require_volume(volume, available):
    """Boxes taken from an entry must satisfy 1 <= volume <= available."""
    number = _whole_number(volume)
    if number is None:
        raise InvalidVolume("Volume must be a whole number of boxes")
    if number <= 0 or number > available:
        raise InvalidVolume(
            "Volume must be between 1 and {} (got {})".format(available, number)
        )
    return number
