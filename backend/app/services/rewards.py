"""Token rewards for crossing recording milestones.

Called once per successful recording with the count returned by the
increment. The first two milestones are one-off claims whose size
depends on how many profiles exist (early adopters get double); every
later ladder breakpoint pays a flat amount. Each count value is handed
out to exactly one recording, so ladder rewards cannot be paid twice,
and the one-off claims go through a conditional flag update.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config import settings
from app.models import Profile
from app.services.profile_service import claim_milestone_flag, credit_tokens
from app.services.session_selector import (
    FIRST_MILESTONE,
    SECOND_MILESTONE,
    is_milestone,
)

logger = logging.getLogger(__name__)

FIRST_REWARD = (200, 100)  # (early adopter, everyone else)
SECOND_REWARD = (800, 400)
LADDER_REWARD = 1000


@dataclass
class MilestoneAward:
    milestone: int  # 1, 2 or 50
    reward: int
    transaction_type: str


def _is_early_adopter(db: Session) -> bool:
    total = db.query(func.count(Profile.id)).scalar() or 0
    return total < settings.early_adopter_limit


def award_milestone(db: Session, user_id: str, count: int) -> Optional[MilestoneAward]:
    """Grant tokens if count (the just-incremented recordings_count) is a milestone.

    Does not commit; the caller owns the transaction.
    """
    award = None

    if count == FIRST_MILESTONE:
        if claim_milestone_flag(db, user_id, Profile.milestone1_claimed):
            early, regular = FIRST_REWARD
            amount = early if _is_early_adopter(db) else regular
            credit_tokens(db, user_id, amount, "milestone_1", f"Milestone 1 reached: +{amount} A-Coin")
            award = MilestoneAward(1, amount, "milestone_1")

    elif count == SECOND_MILESTONE:
        if claim_milestone_flag(db, user_id, Profile.milestone2_claimed):
            early, regular = SECOND_REWARD
            amount = early if _is_early_adopter(db) else regular
            credit_tokens(db, user_id, amount, "milestone_2", f"Milestone 2 reached: +{amount} A-Coin")
            award = MilestoneAward(2, amount, "milestone_2")

    elif count > SECOND_MILESTONE and is_milestone(count):
        credit_tokens(
            db, user_id, LADDER_REWARD, "milestone_50",
            f"{count} sentences recorded: +{LADDER_REWARD} A-Coin",
        )
        award = MilestoneAward(50, LADDER_REWARD, "milestone_50")

    if award:
        logger.info(f"Profile {user_id} reached milestone {award.milestone} at {count}: +{award.reward}")
    return award
