from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class OrderStatus(str, Enum):
    CREATED = "created"
    PAID = "paid"


class OrderRecord(BaseModel):
    """one line of the local order log."""

    model_config = ConfigDict(extra="allow")

    order_id: str
    amount: int  # subunits, as echoed by the gateway
    currency: str
    receipt: Optional[str] = None
    status: OrderStatus = OrderStatus.CREATED
    payment_id: Optional[str] = None
    webhook_received: Optional[bool] = None

    @model_validator(mode="after")
    def _payment_id_matches_status(self):
        if (self.status == OrderStatus.PAID) != bool(self.payment_id):
            raise ValueError("payment_id must be set exactly when status is paid")
        return self

    def mark_paid(self, payment_id: str) -> "OrderRecord":
        # paid is terminal, a repeat confirmation keeps the first payment id
        if self.status == OrderStatus.PAID:
            return self
        return self.model_copy(update={"status": OrderStatus.PAID, "payment_id": payment_id})

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
