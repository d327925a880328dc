"""
LevelService: persist experience/points on the user row and expose read projections.
"""
import logging

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.application.users import UserNotFoundError
from app.domain.level import (
    LevelUpResult,
    add_experience,
    experience_to_next_level,
    progress_percentage,
    level_title,
    level_color,
)
from app.domain.points import PointsStatus, status_of
from app.infrastructure.db.models import User

logger = logging.getLogger(__name__)


class LevelService:
    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Experience
    # ------------------------------------------------------------------

    def add_experience(self, user_id: str, amount: int) -> LevelUpResult:
        """
        Add experience to the user and persist the resulting level.

        Plain read-then-write: no row lock, concurrent grants for the same
        user can overwrite each other.

        Raises:
            UserNotFoundError: 사용자가 없는 경우
        """
        row = self.db.execute(
            select(User.level, User.experience).where(User.id == user_id)
        ).first()
        if row is None:
            raise UserNotFoundError(f"User not found: {user_id}")

        result = add_experience(row.level, row.experience, amount)

        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(level=result.new_level, experience=result.new_experience)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

        if result.leveled_up:
            logger.info(
                "User %s leveled up to %d (+%d level(s))",
                user_id, result.new_level, result.levels_gained,
            )
        return result

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def add_points(self, user_id: str, amount: int) -> int:
        """Credit points (no upper cap). Returns the new balance."""
        self._apply_points(user_id, User.points + amount)
        return self._points_of(user_id)

    def deduct_points(self, user_id: str, amount: int) -> int:
        """
        Spend points, clamping the balance at zero. Returns the new balance.

        Does not check affordability: call get_user_points() first.
        """
        self._apply_points(
            user_id,
            case((User.points > amount, User.points - amount), else_=0),
        )
        balance = self._points_of(user_id)
        logger.info("Deducted %d point(s) from user %s, balance=%d", amount, user_id, balance)
        return balance

    def _apply_points(self, user_id: str, expression) -> None:
        result = self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(points=expression)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise UserNotFoundError(f"User not found: {user_id}")
        self.db.commit()

    def _points_of(self, user_id: str) -> int:
        return self.db.scalar(select(User.points).where(User.id == user_id))

    def get_user_points(self, user_id: str) -> PointsStatus | None:
        points = self._points_of(user_id)
        if points is None:
            return None
        return status_of(points, cost=self.settings.AI_QUESTION_COST)

    # ------------------------------------------------------------------
    # Read projection
    # ------------------------------------------------------------------

    def get_user_level_info(self, user_id: str) -> dict | None:
        """Level, progress and points view for profile / ranking UI."""
        row = self.db.execute(
            select(User.level, User.experience, User.points).where(User.id == user_id)
        ).first()
        if row is None:
            return None

        level, experience = row.level, row.experience
        return {
            "level": level,
            "experience": experience,
            "expToNext": experience_to_next_level(level, experience),
            "progress": progress_percentage(level, experience),
            "title": level_title(level),
            "color": level_color(level),
            "points": status_of(row.points, cost=self.settings.AI_QUESTION_COST).as_dict(),
        }
