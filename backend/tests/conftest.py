import os
import pytest
from contextlib import contextmanager
from sqlalchemy import create_engine, event, StaticPool
from sqlalchemy.orm import sessionmaker

os.environ["TESTING"] = "1"
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from app.database import Base, get_db
from app.main import app
from app.services.sentence_corpus import Sentence, SentenceCorpus


@contextmanager
def count_commits(db_session):
    """Context manager that counts DB commits."""
    counter = {"count": 0}

    def _after_commit(session):
        counter["count"] += 1

    event.listen(db_session, "after_commit", _after_commit)
    try:
        yield counter
    finally:
        event.remove(db_session, "after_commit", _after_commit)


def make_corpus(n_anchors=3, n_pool=5) -> SentenceCorpus:
    """Synthetic corpus with anchors a1..aN and pool p1..pM."""
    anchors = [
        Sentence(id=f"a{i}", text=f"Anchor sentence {i}", category="anchor", word_count=4)
        for i in range(1, n_anchors + 1)
    ]
    pool = [
        Sentence(id=f"p{i}", text=f"Pool sentence {i}", category="daily", word_count=3)
        for i in range(1, n_pool + 1)
    ]
    return SentenceCorpus(anchors + pool)


@pytest.fixture
def small_corpus():
    return make_corpus()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def file_sessionmaker(tmp_path):
    """Sessions on a real SQLite file, so separate sessions use separate connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine)
    finally:
        engine.dispose()
