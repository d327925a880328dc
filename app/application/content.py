"""
Question / answer use cases.

Create paths run as one transaction (row + images + score). Only after the
commit does the RewardDispatcher grant experience and points; its failures
never undo the post.

    start -> writing -> committed -> rewarding -> done
    start -> writing -> rolled_back (error raised, no reward)
"""
import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.application.rewards import RewardDispatcher, RewardOutcome
from app.domain.rewards import QUESTION_POSTED, ANSWER_POSTED
from app.infrastructure.db.models import Answer, Image, Question, User, STAFF_ROLES

logger = logging.getLogger(__name__)

ENTITY_QUESTION = "question"
ENTITY_ANSWER = "answer"

TITLE_MAX = 500


class ContentValidationError(ValueError):
    """잘못된 질문/답변 입력"""
    pass


class ContentNotFoundError(LookupError):
    pass


class ContentPermissionError(PermissionError):
    pass


@dataclass(frozen=True)
class ContentCreated:
    id: int
    reward: RewardOutcome

    @property
    def level_up(self) -> dict | None:
        """Level-up payload for the client, only when the reward leveled the user."""
        if self.reward.ok and self.reward.result.leveled_up:
            return self.reward.as_dict()
        return None


def _add_images(db: Session, entity_type: str, entity_id: int, images: list[str] | None) -> None:
    for url in images or []:
        db.add(Image(url=url, entity_type=entity_type, entity_id=entity_id))


def _adjust_score(db: Session, user_id: str, delta: int) -> None:
    if delta:
        db.execute(
            update(User)
            .where(User.id == user_id)
            .values(score=User.score + delta)
            .execution_options(synchronize_session=False)
        )


def _delete_images(db: Session, entity_type: str, entity_ids: list[int]) -> None:
    if entity_ids:
        db.execute(
            delete(Image)
            .where(Image.entity_type == entity_type, Image.entity_id.in_(entity_ids))
            .execution_options(synchronize_session=False)
        )


def validate_question(title: str | None, content: str | None) -> tuple[str, str]:
    """Stripped (title, content); raises ContentValidationError on blank or oversized input."""
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ContentValidationError("제목과 내용은 필수입니다.")
    if len(title) > TITLE_MAX:
        raise ContentValidationError("제목은 500자 이하로 입력해주세요.")
    return title, content


def validate_answer(content: str | None) -> str:
    content = (content or "").strip()
    if not content:
        raise ContentValidationError("답변 내용은 필수입니다.")
    return content


def _can_moderate(actor: User) -> bool:
    return actor.role in STAFF_ROLES


class _ContentUseCase:
    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def _reward(self, user_id: str, action: str) -> RewardOutcome:
        return RewardDispatcher(self.db, self.settings).reward_content_action(user_id, action)


class CreateQuestionUseCase(_ContentUseCase):
    """
    Use case: 질문 작성

    1. questions + images insert, score += SCORE_QUESTION_POSTED (하나의 트랜잭션)
    2. commit
    3. EXP/포인트 보상 (best-effort)
    """

    def execute(self, user_id: str, title: str, content: str, images: list[str] | None = None) -> ContentCreated:
        title, content = validate_question(title, content)

        try:
            question = Question(user_id=user_id, title=title, content=content)
            self.db.add(question)
            self.db.flush()
            question_id = question.id
            _add_images(self.db, ENTITY_QUESTION, question_id, images)
            _adjust_score(self.db, user_id, self.settings.SCORE_QUESTION_POSTED)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Question %d created by user %s", question_id, user_id)
        return ContentCreated(id=question_id, reward=self._reward(user_id, QUESTION_POSTED))


class CreateAnswerUseCase(_ContentUseCase):
    """
    Use case: 답변 작성

    Same transaction shape as CreateQuestionUseCase; score += SCORE_ANSWER_POSTED.
    """

    def execute(self, question_id: int, user_id: str, content: str, images: list[str] | None = None) -> ContentCreated:
        content = validate_answer(content)

        if not self.db.get(Question, question_id):
            raise ContentNotFoundError("질문을 찾을 수 없습니다.")

        try:
            answer = Answer(question_id=question_id, user_id=user_id, content=content)
            self.db.add(answer)
            self.db.flush()
            answer_id = answer.id
            _add_images(self.db, ENTITY_ANSWER, answer_id, images)
            _adjust_score(self.db, user_id, self.settings.SCORE_ANSWER_POSTED)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Answer %d created on question %d by user %s", answer_id, question_id, user_id)
        return ContentCreated(id=answer_id, reward=self._reward(user_id, ANSWER_POSTED))


class UpdateQuestionUseCase(_ContentUseCase):
    """Only the author may edit a question."""

    def execute(self, question_id: int, actor: User, title: str, content: str) -> Question:
        title, content = validate_question(title, content)

        question = self.db.get(Question, question_id)
        if not question:
            raise ContentNotFoundError("질문을 찾을 수 없습니다.")
        if question.user_id != actor.id:
            raise ContentPermissionError("자신의 질문만 수정할 수 있습니다.")

        question.title = title
        question.content = content
        self.db.commit()
        return question


class UpdateAnswerUseCase(_ContentUseCase):
    def execute(self, answer_id: int, actor: User, content: str) -> Answer:
        content = validate_answer(content)

        answer = self.db.get(Answer, answer_id)
        if not answer:
            raise ContentNotFoundError("답변을 찾을 수 없습니다.")
        if answer.user_id != actor.id:
            raise ContentPermissionError("자신의 답변만 수정할 수 있습니다.")

        answer.content = content
        self.db.commit()
        return answer


class DeleteQuestionUseCase(_ContentUseCase):
    """
    Use case: 질문 삭제 (작성자 또는 운영진)

    Removes the question, its answers and every attached image in one
    transaction. Score, experience and points are left as they are.
    """

    def execute(self, question_id: int, actor: User) -> None:
        question = self.db.get(Question, question_id)
        if not question:
            raise ContentNotFoundError("질문을 찾을 수 없습니다.")
        if question.user_id != actor.id and not _can_moderate(actor):
            raise ContentPermissionError("자신의 질문만 삭제할 수 있습니다.")

        try:
            answer_ids = list(self.db.scalars(
                select(Answer.id).where(Answer.question_id == question_id)
            ))
            _delete_images(self.db, ENTITY_ANSWER, answer_ids)
            _delete_images(self.db, ENTITY_QUESTION, [question_id])
            self.db.execute(
                delete(Answer)
                .where(Answer.question_id == question_id)
                .execution_options(synchronize_session=False)
            )
            self.db.delete(question)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Question %d deleted by user %s", question_id, actor.id)


class DeleteAnswerUseCase(_ContentUseCase):
    """
    Use case: 답변 삭제 (작성자 또는 운영진)

    Mirrors CreateAnswerUseCase for the score only: author's score -=
    SCORE_ANSWER_POSTED, images and row removed in one transaction.
    Experience and points already granted are kept (there is no level-down).
    """

    def execute(self, answer_id: int, actor: User) -> None:
        answer = self.db.get(Answer, answer_id)
        if not answer:
            raise ContentNotFoundError("답변을 찾을 수 없습니다.")
        if answer.user_id != actor.id and not _can_moderate(actor):
            raise ContentPermissionError("자신의 답변만 삭제할 수 있습니다.")

        author_id = answer.user_id
        try:
            _adjust_score(self.db, author_id, -self.settings.SCORE_ANSWER_POSTED)
            _delete_images(self.db, ENTITY_ANSWER, [answer_id])
            self.db.delete(answer)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Answer %d deleted by user %s", answer_id, actor.id)
