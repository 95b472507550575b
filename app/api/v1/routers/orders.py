from fastapi import APIRouter, Depends, HTTPException

from app.db.orders import get_order_store
from app.schemas.orders import OrderListResponse, OrderOut
from app.services.errors import StorageError
from app.services.orders.store import OrderStore

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
def list_orders(store: OrderStore = Depends(get_order_store)):
    try:
        records = store.load()
    except StorageError:
        raise HTTPException(status_code=500, detail="Error reading orders")
    return OrderListResponse(orders=[OrderOut(**r.to_json()) for r in records], total=len(records))


@router.get("/{order_id}", response_model=OrderOut, response_model_exclude_none=True)
def get_order(order_id: str, store: OrderStore = Depends(get_order_store)):
    try:
        record = store.get(order_id)
    except StorageError:
        raise HTTPException(status_code=500, detail="Error reading orders")
    if not record:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut(**record.to_json())
