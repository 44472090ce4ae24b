# ------ sweetshop/model/__init__.py ------

from .user import User
from .sweet import Sweet
from .cart import Cart, CartItem
from .order import Order, OrderItem
from .bill import Bill
from .transaction import Transaction

__all__ = [
    "User",
    "Sweet",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "Bill",
    "Transaction",
]
