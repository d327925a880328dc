"""
FastAPI dependencies (DB session, authentication)
"""
from fastapi import Depends, Request, HTTPException, status
from sqlalchemy.orm import Session

from app.infrastructure.db.session import get_db as _get_db
from app.infrastructure.db.models import User


# get_db re-export
get_db = _get_db


def get_current_user_id(request: Request) -> str:
    """
    세션의 사용자 id (외부 로그인 콜백이 저장)

    Raises:
        HTTPException(401): 로그인하지 않은 경우
    """
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="로그인이 필요합니다."
        )
    return user_id


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    API endpoint용 현재 사용자

    Raises:
        HTTPException(401): 세션의 사용자가 DB에 없는 경우

    Usage:
        @router.get("/api/v1/user")
        def get_me(user: User = Depends(get_current_user)):
            ...
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


def require_active_user(user: User = Depends(get_current_user)) -> User:
    """Suspended / banned accounts cannot post."""
    if user.status in ("suspended", "banned"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="계정이 제한되어 글을 작성할 수 없습니다."
        )
    return user
