"""
Closed enumerations shared by schemas, services and storage.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Fulfillment / payment status of an order"""
    NEW = "NEW"
    RECEIVED = "RECEIVED"      # Parts arrived at the shop
    NOTIFIED = "NOTIFIED"      # Customer was told to come by
    PAID = "PAID"
    PICKED_UP = "PICKED_UP"
    DEBT = "DEBT"              # Side branch, reachable from any status


class PaymentMethod(str, Enum):
    """How the customer pays"""
    CASH = "CASH"
    CARD = "CARD"
    TRANSFER = "TRANSFER"


class MarkupMode(str, Enum):
    """Base of a bulk price change"""
    MARKUP_ON_BUY = "MARKUP_ON_BUY"      # percent of the buy price
    CHANGE_CURRENT = "CHANGE_CURRENT"    # percent of the current sell price


class StatsPeriod(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"
    CUSTOM = "custom"
