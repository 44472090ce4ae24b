# sweetshop/utils/parse.py
from ..errors import ValidationError


def parse_positive_int(v, message="Quantity must be greater than 0"):
    """Whole number > 0 from JSON or query input; bools and fractions are rejected."""
    if isinstance(v, bool) or v is None:
        raise ValidationError(message)
    if isinstance(v, float):
        if not v.is_integer():
            raise ValidationError(message)
        v = int(v)
    elif isinstance(v, str):
        v = v.strip()
        if not v.isdecimal():
            raise ValidationError(message)
        v = int(v)
    elif not isinstance(v, int):
        raise ValidationError(message)
    if v <= 0:
        raise ValidationError(message)
    return v


def parse_non_negative_int(v, field):
    if isinstance(v, bool) or v is None:
        raise ValidationError(f"{field} must be a non-negative integer")
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if isinstance(v, str) and v.strip().isdecimal():
        v = int(v.strip())
    if not isinstance(v, int) or v < 0:
        raise ValidationError(f"{field} must be a non-negative integer")
    return v


def parse_opt_float(v, field):
    if v is None:
        return None
    if isinstance(v, str) and v.strip() == "":
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")


def parse_bool(v, default=False):
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}
