# backend/app/schemas/orders.py
from app.db.schemas import OrderDocument


class OrderCreate(OrderDocument):
    """New order body. Values are stored as sent: no sign or mode checks."""
