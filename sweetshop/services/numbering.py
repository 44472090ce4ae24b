# sweetshop/services/numbering.py
import random
import time

from flask import current_app

from ..errors import InternalError
from ..model import Order, Bill
from ..utils.dates import utcnow


def _order_candidate() -> str:
    timestamp = str(int(time.time() * 1000))[-8:]
    return f"ORD-{timestamp}-{random.randint(0, 999):03d}"


def _bill_candidate() -> str:
    return f"BILL-{utcnow().strftime('%Y%m%d')}-{random.randint(0, 9999):04d}"


def _allocate(candidate, exists, label) -> str:
    attempts = int(current_app.config.get("NUMBER_MAX_ATTEMPTS", 10))
    for _ in range(attempts):
        number = candidate()
        if not exists(number):
            return number
        current_app.logger.warning("%s number collision on %s, retrying", label, number)
    raise InternalError(f"Could not allocate a unique {label} number")


def new_order_number() -> str:
    return _allocate(
        _order_candidate,
        lambda n: Order.query.filter_by(order_number=n).first() is not None,
        "order",
    )


def new_bill_number() -> str:
    return _allocate(
        _bill_candidate,
        lambda n: Bill.query.filter_by(bill_number=n).first() is not None,
        "bill",
    )
