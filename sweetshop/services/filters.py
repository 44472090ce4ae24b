# sweetshop/services/filters.py
from ..errors import ValidationError
from ..utils.dates import date_range_filter


def date_criteria(column, start=None, end=None):
    try:
        return date_range_filter(column, start, end)
    except ValueError:
        raise ValidationError("Invalid date; use ISO format YYYY-MM-DD")


def one_of(value, allowed, label):
    if value not in allowed:
        raise ValidationError(f"Invalid {label}")
    return value
