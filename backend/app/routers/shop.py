"""Voucher shop endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_user_id
from app.schemas import ShopItemOut, VoucherIn, VoucherOut
from app.services.profile_service import InsufficientTokensError
from app.services.shop_service import (
    SHOP_ITEMS,
    AlreadyOrderedError,
    UnknownShopItemError,
    list_vouchers,
    purchase,
)

router = APIRouter(prefix="/api", tags=["shop"])


@router.get("/shop/items", response_model=list[ShopItemOut])
def shop_items():
    return list(SHOP_ITEMS.values())


@router.get("/vouchers", response_model=list[VoucherOut])
def vouchers(
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    return list_vouchers(db, user_id)


@router.post("/vouchers", response_model=VoucherOut)
def order_voucher(
    req: VoucherIn,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    try:
        return purchase(db, user_id, req.item_id)
    except UnknownShopItemError:
        raise HTTPException(status_code=400, detail="No such shop item")
    except AlreadyOrderedError:
        raise HTTPException(status_code=400, detail="This item has already been ordered")
    except InsufficientTokensError:
        raise HTTPException(status_code=400, detail="Not enough tokens")
