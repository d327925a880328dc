"""
Session helpers (the identity-provider handshake itself lives outside this app)
"""
from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from app.infrastructure.db.models import User


router = APIRouter(tags=["auth"])


def start_session(request: Request, user: User) -> None:
    """
    로그인 콜백에서 호출: find_or_create_user() 결과를 세션에 저장
    """
    request.session["user_id"] = user.id
    request.session["role"] = user.role


@router.get("/logout")
def logout(request: Request):
    """
    로그아웃
    """
    request.session.clear()
    return RedirectResponse("/", status_code=302)
