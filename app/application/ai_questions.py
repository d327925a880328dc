"""
AI question use case: pay points, ask Gemini.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.application.levels import LevelService
from app.application.users import UserNotFoundError
from app.domain.points import PointsStatus
from app.infrastructure.ai.gemini import AiServiceError, GeminiClient

logger = logging.getLogger(__name__)


class AiQuestionValidationError(ValueError):
    pass


class AiUnavailableError(RuntimeError):
    """GEMINI_API_KEY 미설정"""
    pass


class InsufficientPointsError(Exception):
    def __init__(self, status: PointsStatus):
        super().__init__(f"Not enough points: {status.current}/{status.required}")
        self.status = status


@dataclass(frozen=True)
class AiAnswer:
    answer: str
    points_used: int
    remaining_points: int


class AskAiQuestionUseCase:
    """
    Use case: AI 질문

    1. 포인트 확인 (can_afford): 부족하면 InsufficientPointsError, 차감 없음
    2. AI_QUESTION_COST 차감
    3. Gemini 호출; 실패 시 차감한 포인트를 돌려주고 AiServiceError 전파
    """

    def __init__(self, db: Session, client: GeminiClient | None = None, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.client = client or GeminiClient(self.settings)

    def execute(self, user_id: str, question: str) -> AiAnswer:
        if not question or not question.strip():
            raise AiQuestionValidationError("질문을 입력해주세요.")
        if not self.client.enabled:
            raise AiUnavailableError("AI 서비스가 현재 사용할 수 없습니다.")

        levels = LevelService(self.db, self.settings)
        status = levels.get_user_points(user_id)
        if status is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        if not status.can_afford:
            raise InsufficientPointsError(status)

        cost = self.settings.AI_QUESTION_COST
        remaining = levels.deduct_points(user_id, cost)

        try:
            answer = self.client.answer(question)
        except AiServiceError:
            logger.exception("AI question failed for user_id=%s, refunding %d point(s)", user_id, cost)
            levels.add_points(user_id, cost)
            raise

        return AiAnswer(answer=answer, points_used=cost, remaining_points=remaining)
