import json
import os
from datetime import datetime, timezone
from pathlib import Path

from app.config import settings


def _get_log_path() -> Path:
    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    return log_dir / f"interactions_{today}.jsonl"


def log_interaction(
    event: str,
    user_id: str | None = None,
    sentence_id: str | None = None,
    duration: float | None = None,
    recordings_count: int | None = None,
    milestone: int | None = None,
    **extra,
) -> None:
    if os.environ.get("TESTING"):
        return

    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "user_id": user_id,
        "sentence_id": sentence_id,
        "duration": duration,
        "recordings_count": recordings_count,
        "milestone": milestone,
        **extra,
    }
    entry = {k: v for k, v in entry.items() if v is not None}

    log_path = _get_log_path()
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, ensure_ascii=False) + "\n")
