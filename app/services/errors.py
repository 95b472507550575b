from typing import Optional


class PaymentsError(Exception):
    """base error for gateway, storage and webhook failures."""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class GatewayError(PaymentsError):
    """gateway rejected the request or could not be reached."""


class StorageError(PaymentsError):
    """order file could not be read or written."""


class DuplicateOrderError(StorageError):
    pass


class SignatureError(PaymentsError):
    pass


class WebhookPayloadError(PaymentsError):
    pass
