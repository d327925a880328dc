"""
Tests for RewardDispatcher (best-effort experience + points grant)
"""
from unittest.mock import patch

from app.application.rewards import RewardDispatcher, RewardFailed, RewardGranted
from app.domain.level import required_experience
from app.domain.rewards import ANSWER_POSTED, QUESTION_POSTED
from app.infrastructure.db.models import User


def test_question_reward_for_fresh_user(db_session, sample_user, settings):
    outcome = RewardDispatcher(db_session, settings).reward_content_action(sample_user.id, QUESTION_POSTED)

    assert isinstance(outcome, RewardGranted)
    assert outcome.ok is True
    assert outcome.result.new_experience == 20
    assert outcome.result.new_level == 1
    assert outcome.result.leveled_up is False
    assert outcome.points_balance == 3

    db_session.expire_all()
    user = db_session.get(User, sample_user.id)
    assert (user.level, user.experience, user.points) == (1, 20, 3)


def test_answer_reward_crossing_one_level(db_session, make_user, settings):
    make_user("u4", level=4, experience=required_experience(5) - 1)

    outcome = RewardDispatcher(db_session, settings).reward_content_action("u4", ANSWER_POSTED)

    assert outcome.as_dict() == {
        "leveledUp": True,
        "levelsGained": 1,
        "newLevel": 5,
        "newExp": required_experience(5) + 29,
        "message": '🎉 레벨업! Level 5 달성! "중급자" 칭호를 획득했습니다!',
    }
    assert outcome.points_balance == 10


def test_missing_user_returns_failure(db_session, settings):
    outcome = RewardDispatcher(db_session, settings).reward_content_action("nobody", QUESTION_POSTED)

    assert isinstance(outcome, RewardFailed)
    assert outcome.ok is False
    assert "nobody" in outcome.reason


def test_unknown_action_returns_failure(db_session, sample_user, settings):
    outcome = RewardDispatcher(db_session, settings).reward_content_action(sample_user.id, "comment_posted")
    assert outcome.ok is False


def test_storage_error_is_swallowed_and_logged(db_session, sample_user, settings, caplog):
    with patch(
        "app.application.rewards.LevelService.add_points",
        side_effect=RuntimeError("connection reset"),
    ):
        outcome = RewardDispatcher(db_session, settings).reward_content_action(sample_user.id, ANSWER_POSTED)

    assert outcome == RewardFailed(reason="connection reset")
    assert "Reward grant failed" in caplog.text

    # experience commit happened before the points failure and stays
    db_session.expire_all()
    user = db_session.get(User, sample_user.id)
    assert user.experience == 30
    assert user.points == 0


def test_custom_reward_tables(db_session, sample_user, settings):
    custom = settings.model_copy(update={"EXP_QUESTION_POSTED": 300, "POINTS_QUESTION_POSTED": 1})

    outcome = RewardDispatcher(db_session, custom).reward_content_action(sample_user.id, QUESTION_POSTED)

    assert outcome.result.new_level == 2
    assert outcome.points_balance == 1
