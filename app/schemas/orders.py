from typing import List, Optional
from pydantic import BaseModel


class OrderOut(BaseModel):
    order_id: str
    amount: int
    currency: str
    receipt: Optional[str] = None
    status: str
    payment_id: Optional[str] = None
    webhook_received: Optional[bool] = None

    class Config:
        from_attributes = True


class OrderListResponse(BaseModel):
    orders: List[OrderOut]
    total: int
