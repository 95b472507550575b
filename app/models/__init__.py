from .orders import OrderRecord, OrderStatus

__all__ = ["OrderRecord", "OrderStatus"]
