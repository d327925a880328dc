"""
Tests for reward tables
"""
import pytest

from app.config import Settings
from app.domain.rewards import (
    ANSWER_POSTED,
    QUESTION_POSTED,
    ExperienceRewards,
    PointRewards,
    RewardEvent,
    UnknownActionError,
)


def test_default_experience_table():
    rewards = ExperienceRewards()
    assert rewards.for_action(QUESTION_POSTED) == 20
    assert rewards.for_action(ANSWER_POSTED) == 30


def test_unknown_action_raises():
    with pytest.raises(UnknownActionError):
        ExperienceRewards().for_action("ai_question_cost")
    with pytest.raises(UnknownActionError):
        PointRewards().for_action("comment_posted")


def test_tables_from_settings():
    settings = Settings(EXP_ANSWER_POSTED=45, POINTS_ANSWER_POSTED=12, AI_QUESTION_COST=70)
    assert ExperienceRewards.from_settings(settings).answer_posted == 45
    points = PointRewards.from_settings(settings)
    assert points.answer_posted == 12
    assert points.ai_question_cost == 70


def test_reward_event_combines_both_tracks():
    event = RewardEvent.for_action(ANSWER_POSTED, ExperienceRewards(), PointRewards())
    assert event == RewardEvent(action=ANSWER_POSTED, experience=30, points=10)
