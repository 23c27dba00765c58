"""Recording flow endpoints: session building, submission, progress."""

import csv
import io
import logging
import math

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import get_sentence_corpus, get_user_id
from app.schemas import (
    MilestoneProgressOut,
    RecordingIn,
    RecordingResultOut,
    SentenceOut,
    SessionOut,
)
from app.services.interaction_logger import log_interaction
from app.services.recording_service import (
    METADATA_HEADER,
    UnknownSentenceError,
    get_recorded_sentence_ids,
    iter_metadata_rows,
    submit_recording,
)
from app.services.profile_service import get_or_create_profile
from app.services.recording_session import (
    RecordingSession,
    RecordingTooShortError,
    min_recording_seconds,
)
from app.services.sentence_corpus import Sentence, SentenceCorpus
from app.services.session_selector import (
    get_next_milestone,
    get_prev_milestone,
    milestone_progress,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recordings"])


def _sentence_out(s: Sentence) -> SentenceOut:
    return SentenceOut(
        id=s.id,
        text=s.text,
        category=s.category,
        word_count=s.word_count,
        emotion=s.emotion,
        context=s.context,
        min_duration=math.ceil(min_recording_seconds(s.word_count)),
    )


def _progress(total: int) -> MilestoneProgressOut:
    return MilestoneProgressOut(
        total_recorded=total,
        prev_milestone=get_prev_milestone(total),
        next_milestone=get_next_milestone(total),
        progress_percent=round(milestone_progress(total), 2),
    )


@router.get("/api/recordings/sentence-ids", response_model=list[str])
def recorded_sentence_ids(
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    return sorted(get_recorded_sentence_ids(db, user_id))


@router.get("/api/recordings/session", response_model=SessionOut)
def next_session(
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    corpus: SentenceCorpus = Depends(get_sentence_corpus),
):
    """Build a fresh recording session from the server-side recorded set."""
    profile = get_or_create_profile(db, user_id)
    session = RecordingSession(
        corpus, get_recorded_sentence_ids(db, user_id), session_size=settings.session_size,
    )
    phrases = session.phrases
    log_interaction(
        event="session_built",
        user_id=user_id,
        recordings_count=profile.recordings_count,
        session_size=len(phrases),
        anchors_pending=session.anchors_pending,
    )
    return SessionOut(
        sentences=[_sentence_out(s) for s in phrases],
        anchors_pending=session.anchors_pending,
        fresh_pool_remaining=session.fresh_pool_remaining,
        progress=_progress(profile.recordings_count),
    )


@router.post("/api/recordings", response_model=RecordingResultOut)
def create_recording(
    req: RecordingIn,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    corpus: SentenceCorpus = Depends(get_sentence_corpus),
):
    try:
        outcome = submit_recording(
            db, corpus, user_id,
            sentence_id=req.sentence_id,
            duration=req.duration,
            file_size=req.file_size,
        )
    except UnknownSentenceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RecordingTooShortError as e:
        raise HTTPException(
            status_code=400,
            detail=f"Read too fast. At least {e.min_seconds} seconds required.",
        )
    return RecordingResultOut(
        recording_id=outcome.recording_id,
        recordings_count=outcome.recordings_count,
        tokens=outcome.tokens,
        milestone=outcome.milestone,
        milestone_reward=outcome.milestone_reward,
    )


@router.get("/api/recordings/progress", response_model=MilestoneProgressOut)
def recording_progress(
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    profile = get_or_create_profile(db, user_id)
    return _progress(profile.recordings_count)


@router.get("/api/export/metadata.csv")
def export_metadata(db: Session = Depends(get_db)):
    """TTS dataset metadata for every stored recording."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    buf.write(",".join(METADATA_HEADER) + "\n")
    count = 0
    for row in iter_metadata_rows(db):
        writer.writerow(row)
        count += 1
    logger.info(f"Exported metadata for {count} recordings")
    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=metadata.csv"},
    )
