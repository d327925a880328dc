"""
Current-user API: profile, level, points, ranking
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.application.levels import LevelService
from app.application.users import UpdateProfileUseCase, ProfileValidationError
from app.infrastructure.db.models import User
from app.readmodels.rankings import get_user_ranking


router = APIRouter(prefix="/api/v1/user", tags=["user"])


# === Request models ===

class UpdateProfileRequest(BaseModel):
    display_name: str
    status_message: str | None = None


# === Endpoints ===

@router.get("")
def get_me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """현재 사용자 + levelInfo"""
    return {
        "id": user.id,
        "displayName": user.display_name or "사용자",
        "email": user.email,
        "score": user.score,
        "level": user.level,
        "experience": user.experience,
        "statusMessage": user.status_message,
        "role": user.role,
        "status": user.status,
        "levelInfo": LevelService(db).get_user_level_info(user.id),
    }


@router.put("/profile")
def update_profile(
    req: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """닉네임 / 상태메시지 변경"""
    try:
        UpdateProfileUseCase(db).execute(user.id, req.display_name, req.status_message)
    except ProfileValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "message": "프로필이 업데이트되었습니다."}


@router.get("/level")
def get_level(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    level_info = LevelService(db).get_user_level_info(user.id)
    if level_info is None:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")
    return level_info


@router.get("/points")
def get_points(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    status = LevelService(db).get_user_points(user.id)
    if status is None:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")
    return status.as_dict()


@router.get("/ranking")
def get_my_ranking(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """내 점수 순위 / 레벨 순위"""
    ranking = get_user_ranking(db, user.id)
    if ranking is None:
        raise HTTPException(status_code=404, detail="사용자 정보를 찾을 수 없습니다.")
    return ranking
