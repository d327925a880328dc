"""
Ranking API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.config import get_settings
from app.readmodels.rankings import get_top_rankings, get_score_ranking, get_level_ranking


router = APIRouter(prefix="/api/v1", tags=["rankings"])


@router.get("/rankings")
def top_rankings(db: Session = Depends(get_db)):
    """상위 10명 (점수)"""
    return get_top_rankings(db, limit=10)


@router.get("/ranking/score")
def score_ranking(db: Session = Depends(get_db)):
    return get_score_ranking(db, limit=get_settings().RANKING_LIMIT)


@router.get("/ranking/level")
def level_ranking(db: Session = Depends(get_db)):
    return get_level_ranking(db, limit=get_settings().RANKING_LIMIT)
