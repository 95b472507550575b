import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from app.db.orders import get_order_service
from app.schemas.payments import WebhookResponse
from app.services.errors import SignatureError, StorageError, WebhookPayloadError
from app.services.orders.service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/razorpay", response_model=WebhookResponse)
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: str | None = Header(None),
    service: OrderService = Depends(get_order_service),
):
    """
    Handle Razorpay payment events.

    The signature is an HMAC-SHA256 of the raw body, so read bytes rather than
    request.json(). Unknown events and unknown orders are acknowledged so the
    gateway stops retrying.
    """
    body = await request.body()
    try:
        # store I/O and its lock stay off the event loop
        result = await run_in_threadpool(service.apply_webhook, body, x_razorpay_signature)
    except SignatureError:
        raise HTTPException(status_code=400, detail="Invalid signature")
    except WebhookPayloadError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StorageError as e:
        logger.error(f"Error applying webhook: {e.message} {e.detail or ''}".rstrip())
        raise HTTPException(status_code=500, detail="Error processing webhook")
    return WebhookResponse(status=result.value)
