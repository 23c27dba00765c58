from datetime import datetime
from unittest.mock import patch

from app.models import Profile, Recording
from scripts.export_metadata import export


def _seed(db):
    db.add(Profile(id="u1", tokens=0, recordings_count=2))
    db.add(Recording(
        user_id="u1", sentence_id="anc_001", sentence_text='Say "hello", please',
        category="anchor", duration=4, created_at=datetime(2024, 1, 1),
    ))
    db.add(Recording(
        user_id="u1", sentence_id="chat_001", sentence_text="Salam",
        category="chat", duration=3, created_at=datetime(2024, 1, 2),
    ))
    db.commit()


def test_export_writes_all_rows(tmp_path, db_session):
    _seed(db_session)
    out = tmp_path / "metadata.csv"
    with patch("scripts.export_metadata.SessionLocal", return_value=db_session):
        written = export(out)

    assert written == 2
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "filename,text,speaker_id,category,duration"
    assert lines[1] == '"az_u1_1704067200000_anc_001.webm","Say ""hello"", please","u1","anchor",4'


def test_export_filters_by_category(tmp_path, db_session):
    _seed(db_session)
    out = tmp_path / "metadata.csv"
    with patch("scripts.export_metadata.SessionLocal", return_value=db_session):
        written = export(out, category="chat")

    assert written == 1
    assert "chat_001" in out.read_text(encoding="utf-8")
