"""Tests for milestone token rewards."""

import pytest

from app.config import settings
from app.models import Profile, Transaction
from app.services.rewards import LADDER_REWARD, award_milestone


def _profile(db, user_id="u1", **kwargs):
    p = Profile(id=user_id, tokens=kwargs.pop("tokens", 0), recordings_count=0, **kwargs)
    db.add(p)
    db.flush()
    return p


def test_no_award_between_milestones(db_session):
    _profile(db_session)
    for count in (1, 4, 6, 19, 21, 50, 69, 100):
        assert award_milestone(db_session, "u1", count) is None
    assert db_session.query(Transaction).count() == 0


def test_first_milestone_early_adopter(db_session):
    p = _profile(db_session)
    award = award_milestone(db_session, "u1", 5)
    db_session.refresh(p)

    assert award.milestone == 1
    assert award.reward == 200
    assert p.tokens == 200
    assert p.milestone1_claimed is True
    tx = db_session.query(Transaction).one()
    assert tx.type == "milestone_1"
    assert tx.amount == 200


def test_first_milestone_after_early_adopter_window(db_session, monkeypatch):
    monkeypatch.setattr(settings, "early_adopter_limit", 1)
    _profile(db_session)
    award = award_milestone(db_session, "u1", 5)
    assert award.reward == 100


def test_first_milestone_claimed_once(db_session):
    p = _profile(db_session)
    assert award_milestone(db_session, "u1", 5) is not None
    assert award_milestone(db_session, "u1", 5) is None
    db_session.refresh(p)
    assert p.tokens == 200
    assert db_session.query(Transaction).count() == 1


def test_already_claimed_flag_blocks_award(db_session):
    _profile(db_session, milestone1_claimed=True)
    assert award_milestone(db_session, "u1", 5) is None


@pytest.mark.parametrize("limit,expected", [(1000, 800), (1, 400)])
def test_second_milestone(db_session, monkeypatch, limit, expected):
    monkeypatch.setattr(settings, "early_adopter_limit", limit)
    p = _profile(db_session, tokens=200, milestone1_claimed=True)
    award = award_milestone(db_session, "u1", 20)
    db_session.refresh(p)

    assert award.milestone == 2
    assert award.reward == expected
    assert p.tokens == 200 + expected
    assert p.milestone2_claimed is True


@pytest.mark.parametrize("count", [70, 120, 170, 520])
def test_ladder_milestones_pay_flat_reward(db_session, count):
    _profile(db_session, milestone1_claimed=True, milestone2_claimed=True)
    award = award_milestone(db_session, "u1", count)

    assert award.milestone == 50
    assert award.reward == LADDER_REWARD
    tx = db_session.query(Transaction).one()
    assert tx.type == "milestone_50"
    assert str(count) in tx.description
