"""
User use cases: find-or-create on login, profile edits
"""
import logging

from sqlalchemy.orm import Session

from app.infrastructure.db.models import User

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "사용자"
DISPLAY_NAME_MAX = 20
STATUS_MESSAGE_MAX = 30


class UserNotFoundError(LookupError):
    """해당 id의 사용자가 없음"""
    pass


class ProfileValidationError(ValueError):
    """프로필 입력값 오류"""
    pass


def get_user(db: Session, user_id: str) -> User:
    """
    Raises:
        UserNotFoundError: 사용자가 없는 경우
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(f"User not found: {user_id}")
    return user


def _display_name_from_profile(profile: dict) -> str:
    name = profile.get("displayName")
    if not name:
        name = (profile.get("_json") or {}).get("name")
    if not name:
        name = (profile.get("name") or {}).get("givenName")
    return name or DEFAULT_DISPLAY_NAME


def _email_from_profile(profile: dict) -> str | None:
    emails = profile.get("emails") or []
    if emails and emails[0].get("value"):
        return emails[0]["value"]
    return (profile.get("_json") or {}).get("email")


def find_or_create_user(db: Session, profile: dict) -> User:
    """
    외부 로그인 프로필 id로 사용자를 찾고, 없으면 새로 만든다

    Args:
        profile: 외부 인증 제공자(Google) 프로필: id, displayName,
                 emails[0].value, _json.name / _json.email, name.givenName

    Returns:
        User: 신규 사용자는 score=0, level=1, experience=0, points=0 으로 시작
    """
    user = db.query(User).filter(User.id == profile["id"]).first()
    if user:
        return user

    user = User(
        id=profile["id"],
        display_name=_display_name_from_profile(profile),
        email=_email_from_profile(profile),
        score=0,
        level=1,
        experience=0,
        points=0,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user id=%s", user.id)
    return user


class UpdateProfileUseCase:
    """
    Use case: 닉네임과 상태메시지 변경

    display_name: 공백 제거 후 1..20자
    status_message: 30자 이하, 빈 문자열은 None
    """

    def __init__(self, db: Session):
        self.db = db

    def execute(self, user_id: str, display_name: str | None, status_message: str | None = None) -> User:
        display_name = (display_name or "").strip()
        if not display_name:
            raise ProfileValidationError("닉네임을 입력해주세요.")
        if len(display_name) > DISPLAY_NAME_MAX:
            raise ProfileValidationError("닉네임은 20자 이하로 입력해주세요.")
        if status_message and len(status_message) > STATUS_MESSAGE_MAX:
            raise ProfileValidationError("상태메시지는 30자 이하로 입력해주세요.")

        user = get_user(self.db, user_id)
        user.display_name = display_name
        user.status_message = (status_message or "").strip() or None
        self.db.commit()
        return user
