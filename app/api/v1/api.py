from fastapi import APIRouter

from app.api.v1.routers import payments as payments_router
from app.api.v1.routers import orders as orders_router
from app.api.v1.routers import webhooks_razorpay as webhooks_razorpay_router

router = APIRouter()

# checkout routes
router.include_router(payments_router.router)
router.include_router(orders_router.router)

# webhook routes
router.include_router(webhooks_razorpay_router.router)
