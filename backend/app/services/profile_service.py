"""Profiles and their token balance.

Counters and balances are only ever changed with single UPDATE
statements evaluated by the database, so two requests for the same user
in flight at once cannot overwrite each other's result.
"""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Profile, Transaction

logger = logging.getLogger(__name__)


class InsufficientTokensError(Exception):
    """Raised when a debit would take the balance below zero."""


def get_or_create_profile(db: Session, user_id: str) -> Profile:
    """Fetch the profile, creating it in its own commit on first sight."""
    profile = db.get(Profile, user_id)
    if profile is not None:
        return profile

    db.add(Profile(id=user_id, tokens=0, recordings_count=0))
    try:
        db.commit()
        logger.info(f"Created profile {user_id}")
    except IntegrityError:
        # another request created it first
        db.rollback()
    return db.get(Profile, user_id)


def update_profile_info(
    db: Session,
    user_id: str,
    age: Optional[str] = None,
    gender: Optional[str] = None,
    display_name: Optional[str] = None,
) -> Profile:
    profile = get_or_create_profile(db, user_id)
    if age is not None:
        profile.age = age
    if gender is not None:
        profile.gender = gender
    if display_name is not None:
        profile.display_name = display_name
    db.commit()
    db.refresh(profile)
    return profile


def increment_recordings_count(db: Session, user_id: str) -> int:
    """Add one to the lifetime count and return the new value."""
    return db.execute(
        update(Profile)
        .where(Profile.id == user_id)
        .values(recordings_count=Profile.recordings_count + 1)
        .returning(Profile.recordings_count)
        .execution_options(synchronize_session=False)
    ).scalar_one()


def claim_milestone_flag(db: Session, user_id: str, flag) -> bool:
    """Flip a one-off milestone flag. True only for the request that flipped it."""
    result = db.execute(
        update(Profile)
        .where(Profile.id == user_id, flag.is_(False))
        .values({flag: True})
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def credit_tokens(db: Session, user_id: str, amount: int, tx_type: str, description: str) -> None:
    db.execute(
        update(Profile)
        .where(Profile.id == user_id)
        .values(tokens=Profile.tokens + amount)
        .execution_options(synchronize_session=False)
    )
    db.add(Transaction(user_id=user_id, amount=amount, type=tx_type, description=description))


def debit_tokens(db: Session, user_id: str, amount: int, tx_type: str, description: str) -> None:
    """Take amount off the balance, or raise InsufficientTokensError and change nothing."""
    result = db.execute(
        update(Profile)
        .where(Profile.id == user_id, Profile.tokens >= amount)
        .values(tokens=Profile.tokens - amount)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InsufficientTokensError(f"Profile {user_id} cannot spend {amount} tokens")
    db.add(Transaction(user_id=user_id, amount=-amount, type=tx_type, description=description))


def get_token_balance(db: Session, user_id: str) -> int:
    return db.execute(select(Profile.tokens).where(Profile.id == user_id)).scalar_one()
