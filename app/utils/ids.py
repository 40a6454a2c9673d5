# app/utils/ids.py
import uuid


def new_id() -> str:
    """Opaque unique identity for customers, vehicles, products, orders and line items."""
    return str(uuid.uuid4())
