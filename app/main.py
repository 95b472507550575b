import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.api.v1.api import router as api_v1_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Payment Order Broker", version="0.1.0")

# set up CORS so the checkout page can talk to us
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# mount our API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.on_event("startup")
def on_startup():
    # orders file is created lazily on the first write
    logger.info(f"Payments provider: {settings.PAYMENTS_PROVIDER}, orders file: {settings.ORDERS_FILE}")
    if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
        logger.warning("Razorpay credentials not configured, order creation and verification will fail")


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.APP_ENV, "payments_provider": settings.PAYMENTS_PROVIDER}


def run():
    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
