"""Voucher shop where users spend earned A-Coin.

Each item can be ordered once per user. The debit, voucher row and
purchase transaction are committed together; the balance check is part
of the debit UPDATE itself.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Voucher
from app.services.profile_service import debit_tokens, get_or_create_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopItem:
    id: str
    name: str
    cost: int
    activation_date: str


SHOP_ITEMS = {
    item.id: item for item in (
        ShopItem("secretary", "Arya Katib (100 Dəqiqə)", 1000, "15 May 2026"),
        ShopItem("translator", "Arya Tərcüməçi", 500, "1 İyul 2026"),
        ShopItem("assistant", "Arya Köməkçi", 750, "15 Avqust 2026"),
        ShopItem("reader", "Arya Oxucu", 300, "1 Sentyabr 2026"),
    )
}


class UnknownShopItemError(Exception):
    pass


class AlreadyOrderedError(Exception):
    pass


def list_vouchers(db: Session, user_id: str) -> list[Voucher]:
    return (
        db.query(Voucher)
        .filter(Voucher.user_id == user_id)
        .order_by(Voucher.created_at.desc(), Voucher.id.desc())
        .all()
    )


def purchase(db: Session, user_id: str, item_id: str) -> Voucher:
    """Order a shop item.

    Raises UnknownShopItemError, AlreadyOrderedError or
    InsufficientTokensError; nothing is written in those cases.
    """
    item = SHOP_ITEMS.get(item_id)
    if item is None:
        raise UnknownShopItemError(f"No such shop item: {item_id}")

    get_or_create_profile(db, user_id)
    already = (
        db.query(Voucher.id)
        .filter(Voucher.user_id == user_id, Voucher.item_name == item.id)
        .first()
    )
    if already:
        raise AlreadyOrderedError(f"{item.id} already ordered by {user_id}")

    voucher = Voucher(
        user_id=user_id,
        item_name=item.id,
        token_cost=item.cost,
        activation_date=item.activation_date,
        status="pending",
    )
    try:
        debit_tokens(db, user_id, item.cost, "purchase", f"{item.name} ordered")
        db.add(voucher)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AlreadyOrderedError(f"{item.id} already ordered by {user_id}") from e
    except Exception:
        db.rollback()
        raise

    logger.info(f"Profile {user_id} ordered {item.id} for {item.cost} tokens")
    return voucher
