"""Persistence side of the recording flow.

Owns the user's lifetime recorded set (the input to session selection)
and the submission path that stores a recording, bumps the count and
pays out milestone rewards in one commit.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Profile, Recording
from app.services.profile_service import (
    get_or_create_profile,
    get_token_balance,
    increment_recordings_count,
)
from app.services.interaction_logger import log_interaction
from app.services.recording_session import check_duration
from app.services.rewards import award_milestone
from app.services.sentence_corpus import SentenceCorpus

logger = logging.getLogger(__name__)

METADATA_HEADER = ("filename", "text", "speaker_id", "category", "duration")


class UnknownSentenceError(Exception):
    """Raised when a submitted sentence id is not in the corpus."""


@dataclass
class RecordingOutcome:
    recording_id: int
    recordings_count: int
    tokens: int
    milestone: Optional[int] = None
    milestone_reward: int = 0


def get_recorded_sentence_ids(db: Session, user_id: str) -> set[str]:
    rows = (
        db.query(Recording.sentence_id)
        .filter(Recording.user_id == user_id)
        .distinct()
        .all()
    )
    return {sid for (sid,) in rows}


def submit_recording(
    db: Session,
    corpus: SentenceCorpus,
    user_id: str,
    sentence_id: str,
    duration: float,
    file_size: int = 0,
) -> RecordingOutcome:
    """Store a finished recording and award any milestone it completes.

    Raises UnknownSentenceError or RecordingTooShortError before anything
    is written. duration is truncated to whole seconds. A first-time
    user's profile is created in its own commit; the recording, the
    count increment and any reward are committed together.
    """
    sentence = corpus.get(sentence_id)
    if sentence is None:
        raise UnknownSentenceError(f"Unknown sentence id: {sentence_id}")
    duration = int(duration)
    check_duration(sentence, duration)

    get_or_create_profile(db, user_id)
    recording = Recording(
        user_id=user_id,
        sentence_id=sentence.id,
        sentence_text=sentence.text,
        category=sentence.category,
        duration=duration,
        file_size=file_size,
    )
    db.add(recording)
    try:
        count = increment_recordings_count(db, user_id)
        award = award_milestone(db, user_id, count)
        tokens = get_token_balance(db, user_id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    log_interaction(
        event="recording_submitted",
        user_id=user_id,
        sentence_id=sentence.id,
        duration=duration,
        recordings_count=count,
        milestone=award.milestone if award else None,
    )
    return RecordingOutcome(
        recording_id=recording.id,
        recordings_count=count,
        tokens=tokens,
        milestone=award.milestone if award else None,
        milestone_reward=award.reward if award else 0,
    )


def get_stats(db: Session) -> dict:
    total_users = db.query(func.count(Profile.id)).scalar() or 0
    total_recordings = db.query(func.count(Recording.id)).scalar() or 0
    total_seconds = db.query(func.coalesce(func.sum(Recording.duration), 0)).scalar() or 0
    return {
        "total_users": total_users,
        "total_recordings": total_recordings,
        "total_hours": round(total_seconds / 3600),
    }


def _metadata_filename(rec: Recording) -> str:
    created = rec.created_at or datetime.now(timezone.utc)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    ts = int(created.timestamp() * 1000)
    return f"az_{rec.user_id}_{ts}_{rec.sentence_id}.webm"


def iter_metadata_rows(db: Session) -> Iterator[tuple]:
    """Rows for the TTS dataset metadata.csv, oldest recording first."""
    for rec in db.query(Recording).order_by(Recording.created_at, Recording.id).yield_per(500):
        yield (
            _metadata_filename(rec),
            rec.sentence_text,
            rec.user_id,
            rec.category,
            rec.duration,
        )
