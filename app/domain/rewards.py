"""
Reward tables for content actions.

Two independent tracks:
  ExperienceRewards: drives leveling (question +20, answer +30)
  PointRewards: spendable balance for AI questions (question +3, answer +10, AI question -50)
"""
from dataclasses import dataclass

QUESTION_POSTED = "question_posted"
ANSWER_POSTED = "answer_posted"

ACTION_KINDS = (QUESTION_POSTED, ANSWER_POSTED)


class UnknownActionError(ValueError):
    """Action kind has no entry in the reward tables"""
    pass


def _check_action(action: str) -> None:
    if action not in ACTION_KINDS:
        raise UnknownActionError(f"Unknown reward action: {action}")


@dataclass(frozen=True)
class ExperienceRewards:
    question_posted: int = 20
    answer_posted: int = 30

    def for_action(self, action: str) -> int:
        _check_action(action)
        return getattr(self, action)

    @classmethod
    def from_settings(cls, settings) -> "ExperienceRewards":
        return cls(
            question_posted=settings.EXP_QUESTION_POSTED,
            answer_posted=settings.EXP_ANSWER_POSTED,
        )


@dataclass(frozen=True)
class PointRewards:
    question_posted: int = 3
    answer_posted: int = 10
    ai_question_cost: int = 50

    def for_action(self, action: str) -> int:
        _check_action(action)
        return getattr(self, action)

    @classmethod
    def from_settings(cls, settings) -> "PointRewards":
        return cls(
            question_posted=settings.POINTS_QUESTION_POSTED,
            answer_posted=settings.POINTS_ANSWER_POSTED,
            ai_question_cost=settings.AI_QUESTION_COST,
        )


@dataclass(frozen=True)
class RewardEvent:
    """Experience and points granted for one content action."""
    action: str
    experience: int
    points: int

    @classmethod
    def for_action(
        cls,
        action: str,
        experience_rewards: ExperienceRewards,
        point_rewards: PointRewards,
    ) -> "RewardEvent":
        return cls(
            action=action,
            experience=experience_rewards.for_action(action),
            points=point_rewards.for_action(action),
        )
