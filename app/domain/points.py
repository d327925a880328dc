"""
Points ledger: spendable balance earned from content and spent on AI questions.

Balance never goes negative: spending clamps at zero. Affordability is the
caller's check (can_afford) and is never enforced by raising here.
"""
from dataclasses import dataclass, asdict

from app.domain.rewards import PointRewards

DEFAULT_POINT_REWARDS = PointRewards()

AI_QUESTION_COST = DEFAULT_POINT_REWARDS.ai_question_cost


@dataclass(frozen=True)
class PointsStatus:
    current: int
    required: int
    needed: int
    can_afford: bool
    progress: float  # 0..100

    def as_dict(self) -> dict:
        data = asdict(self)
        data["canAfford"] = data.pop("can_afford")
        return data


def reward_for(action: str, rewards: PointRewards = DEFAULT_POINT_REWARDS) -> int:
    """Points granted for a content action (question_posted / answer_posted)."""
    return rewards.for_action(action)


def can_afford(balance: int, cost: int = AI_QUESTION_COST) -> bool:
    return balance >= cost


def after_spend(balance: int, cost: int = AI_QUESTION_COST) -> int:
    """Balance left after spending `cost`, floored at zero."""
    return max(0, balance - cost)


def status_of(balance: int, required: int | None = None, cost: int = AI_QUESTION_COST) -> PointsStatus:
    """
    Points view for the AI-question action.

    Args:
        balance:  current points
        required: threshold to compare against; None or 0 falls back to `cost`
        cost:     configured AI question cost

    Returns:
        PointsStatus(current, required, needed, can_afford, progress)
    """
    required = required or cost
    return PointsStatus(
        current=balance,
        required=required,
        needed=max(0, required - balance),
        can_afford=balance >= required,
        progress=min(100.0, balance / required * 100),
    )
