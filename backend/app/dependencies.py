from typing import Optional

from fastapi import Header, HTTPException

from app.services.sentence_corpus import SentenceCorpus, get_corpus


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """The auth gateway in front of the API sets X-User-Id for signed-in users."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


def get_sentence_corpus() -> SentenceCorpus:
    return get_corpus()
