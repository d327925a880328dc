"""
Ranking readmodel: score and level leaderboards over active users.
"""
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from app.infrastructure.db.models import User


def _row(user: User) -> dict:
    return {
        "id": user.id,
        "display_name": user.display_name,
        "score": user.score,
        "level": user.level,
        "experience": user.experience,
        "points": user.points,
    }


def get_top_rankings(db: Session, limit: int = 10) -> list[dict]:
    """Compact top-N by score (home page widget)."""
    users = db.query(User).order_by(User.score.desc()).limit(limit).all()
    return [{"name": u.display_name, "score": u.score} for u in users]


def get_score_ranking(db: Session, limit: int = 50) -> list[dict]:
    users = (
        db.query(User)
        .filter(User.status == "active")
        .order_by(User.score.desc(), User.experience.desc())
        .limit(limit)
        .all()
    )
    return [_row(u) for u in users]


def get_level_ranking(db: Session, limit: int = 50) -> list[dict]:
    users = (
        db.query(User)
        .filter(User.status == "active")
        .order_by(User.level.desc(), User.experience.desc(), User.score.desc())
        .limit(limit)
        .all()
    )
    return [_row(u) for u in users]


def get_user_ranking(db: Session, user_id: str) -> dict | None:
    """
    Position of one user in both leaderboards.

    Rank = 1 + number of active users strictly ahead (ties share a rank).
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None

    score_rank = (
        db.query(func.count(User.id))
        .filter(User.status == "active", User.score > user.score)
        .scalar() or 0
    ) + 1

    level_rank = (
        db.query(func.count(User.id))
        .filter(
            User.status == "active",
            or_(
                User.level > user.level,
                and_(User.level == user.level, User.experience > user.experience),
            ),
        )
        .scalar() or 0
    ) + 1

    return {
        "score": user.score,
        "level": user.level,
        "experience": user.experience,
        "points": user.points,
        "scoreRank": score_rank,
        "levelRank": level_rank,
    }
