from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Boolean, UniqueConstraint
)
from sqlalchemy.orm import relationship

from app.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True)  # opaque user id from the auth gateway
    display_name = Column(Text)
    age = Column(String(20))
    gender = Column(String(20))
    tokens = Column(Integer, nullable=False, default=0)
    recordings_count = Column(Integer, nullable=False, default=0)
    milestone1_claimed = Column(Boolean, nullable=False, default=False)
    milestone2_claimed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_utcnow)

    recordings = relationship("Recording", back_populates="profile")
    transactions = relationship("Transaction", back_populates="profile")
    vouchers = relationship("Voucher", back_populates="profile")


class Recording(Base):
    __tablename__ = "recordings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    sentence_id = Column(String(64), nullable=False, index=True)
    sentence_text = Column(Text, nullable=False)
    category = Column(String(30), nullable=False)
    duration = Column(Integer, nullable=False)  # seconds
    file_size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow)

    profile = relationship("Profile", back_populates="recordings")


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    type = Column(String(30), nullable=False)  # milestone_1/milestone_2/milestone_50/purchase
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    profile = relationship("Profile", back_populates="transactions")


class Voucher(Base):
    __tablename__ = "vouchers"
    __table_args__ = (UniqueConstraint("user_id", "item_name", name="uq_voucher_user_item"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("profiles.id"), nullable=False, index=True)
    item_name = Column(String(50), nullable=False)  # shop item id
    token_cost = Column(Integer, nullable=False)
    activation_date = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending/active
    created_at = Column(DateTime, default=_utcnow)

    profile = relationship("Profile", back_populates="vouchers")
