import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS stuff
    _origins_raw: str = os.getenv("ALLOWED_ORIGINS", "*")
    ALLOWED_ORIGINS: List[str] = [o.strip() for o in _origins_raw.split(",") if o.strip()] if _origins_raw else ["*"]

    # payment gateway
    PAYMENTS_PROVIDER: str = os.getenv("PAYMENTS_PROVIDER", "razorpay")
    RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")
    RAZORPAY_API_URL: str = os.getenv("RAZORPAY_API_URL", "https://api.razorpay.com/v1")
    GATEWAY_TIMEOUT_SECONDS: float = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10"))

    # local order log
    ORDERS_FILE: str = os.getenv("ORDERS_FILE", "orders.json")

    @property
    def RAZORPAY_WEBHOOK_SECRET(self) -> str:
        """webhook secret is configured separately in the dashboard, fall back to the key secret"""
        return os.getenv("RAZORPAY_WEBHOOK_SECRET") or self.RAZORPAY_KEY_SECRET


settings = Settings()
