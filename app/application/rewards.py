"""
RewardDispatcher: grants experience and points after a content post has committed.

Best-effort: any failure is logged and returned as RewardFailed, never raised,
so the already-committed question/answer always stands.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.application.levels import LevelService
from app.domain.level import LevelUpResult
from app.domain.rewards import ExperienceRewards, PointRewards, RewardEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewardGranted:
    result: LevelUpResult
    points_balance: int

    ok = True

    def as_dict(self) -> dict:
        return {
            "leveledUp": self.result.leveled_up,
            "levelsGained": self.result.levels_gained,
            "newLevel": self.result.new_level,
            "newExp": self.result.new_experience,
            "message": self.result.message,
        }


@dataclass(frozen=True)
class RewardFailed:
    reason: str

    ok = False


RewardOutcome = RewardGranted | RewardFailed


class RewardDispatcher:
    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.experience_rewards = ExperienceRewards.from_settings(self.settings)
        self.point_rewards = PointRewards.from_settings(self.settings)

    def reward_content_action(self, user_id: str, action: str) -> RewardOutcome:
        """
        Grant the experience and points for `action` (question_posted / answer_posted).

        Experience/level and points are two separate commits; a failure in
        the second leaves the first in place.
        """
        try:
            event = RewardEvent.for_action(action, self.experience_rewards, self.point_rewards)
            levels = LevelService(self.db, self.settings)
            result = levels.add_experience(user_id, event.experience)
            balance = levels.add_points(user_id, event.points)
        except Exception as exc:
            self.db.rollback()
            logger.exception("Reward grant failed for user_id=%s action=%s", user_id, action)
            return RewardFailed(reason=str(exc))

        return RewardGranted(result=result, points_balance=balance)
