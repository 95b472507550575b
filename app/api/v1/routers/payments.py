import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.db.orders import get_order_service
from app.schemas.payments import CreateOrderRequest, KeyResponse, VerifyPaymentRequest, VerifyPaymentResponse
from app.services.errors import GatewayError, StorageError
from app.services.orders.service import OrderService, VerificationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

_VERIFY_STATUS_CODES = {
    VerificationResult.OK: 200,
    VerificationResult.FAILED: 400,
    VerificationResult.ORDER_NOT_FOUND: 404,
}


@router.post("/create-order")
def create_order(payload: CreateOrderRequest, service: OrderService = Depends(get_order_service)):
    try:
        return service.create_order(
            amount=payload.amount,
            currency=payload.currency,
            receipt=payload.receipt,
            notes=payload.notes,
        )
    except (GatewayError, StorageError) as e:
        logger.error(f"Error creating order: {e.message} {e.detail or ''}".rstrip())
        raise HTTPException(status_code=500, detail="Error creating order")


@router.post("/verify-payment", response_model=VerifyPaymentResponse, response_model_exclude_none=True)
def verify_payment(payload: VerifyPaymentRequest, service: OrderService = Depends(get_order_service)):
    try:
        result = service.verify_payment(
            order_id=payload.razorpay_order_id,
            payment_id=payload.razorpay_payment_id,
            signature=payload.razorpay_signature,
        )
    except StorageError as e:
        logger.error(f"Error verifying payment: {e.message} {e.detail or ''}".rstrip())
        return JSONResponse(status_code=500, content={"status": "error", "message": "Error verifying payment"})

    if result == VerificationResult.OK:
        return VerifyPaymentResponse(status=result.value)
    return JSONResponse(status_code=_VERIFY_STATUS_CODES[result], content={"status": result.value})


@router.get("/get-key", response_model=KeyResponse)
def get_key():
    # public key id only, the secret never leaves the server
    return KeyResponse(key=settings.RAZORPAY_KEY_ID or None)
