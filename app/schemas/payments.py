from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class CreateOrderRequest(BaseModel):
    amount: float = Field(..., allow_inf_nan=False, description="amount in major units, e.g. rupees")
    currency: str = "INR"
    receipt: Optional[str] = None
    notes: Dict[str, Any] = Field(default_factory=dict)


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class VerifyPaymentResponse(BaseModel):
    status: str
    message: Optional[str] = None


class KeyResponse(BaseModel):
    key: Optional[str]


class WebhookResponse(BaseModel):
    status: str
