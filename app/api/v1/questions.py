"""
Question API endpoints (+ posting answers to a question)
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_active_user
from app.api.dedup import DuplicateSubmissionGuard, get_submission_guard
from app.application.content import (
    ContentCreated,
    ContentNotFoundError,
    ContentPermissionError,
    ContentValidationError,
    CreateAnswerUseCase,
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    UpdateQuestionUseCase,
    validate_answer,
    validate_question,
)
from app.infrastructure.db.models import Question, User
from app.readmodels.questions_feed import get_active_questions, get_images


router = APIRouter(prefix="/api/v1/questions", tags=["questions"])


# === Request models ===

class CreateQuestionRequest(BaseModel):
    title: str
    content: str
    images: list[str] = []


class UpdateQuestionRequest(BaseModel):
    title: str
    content: str


class CreateAnswerRequest(BaseModel):
    content: str
    images: list[str] = []


# === Helpers ===

def _created_response(created: ContentCreated, message: str) -> dict:
    body = {"id": created.id, "message": message}
    if created.level_up:
        body["levelUp"] = created.level_up
    return body


def _question_dict(db: Session, question: Question) -> dict:
    return {
        "id": question.id,
        "user_id": question.user_id,
        "title": question.title,
        "content": question.content,
        "status": question.status,
        "images": get_images(db, "question", question.id),
        "created_at": question.created_at,
        "updated_at": question.updated_at,
    }


# === Endpoints ===

@router.get("")
def list_questions(db: Session = Depends(get_db)):
    """활성 질문 목록 (답변, 이미지 포함)"""
    return get_active_questions(db)


@router.post("", status_code=201)
def create_question(
    req: CreateQuestionRequest,
    user: User = Depends(require_active_user),
    db: Session = Depends(get_db),
    guard: DuplicateSubmissionGuard = Depends(get_submission_guard),
):
    """
    질문 작성

    Reward failures do not fail the request; `levelUp` is included only
    when the post leveled the author up.
    """
    try:
        validate_question(req.title, req.content)
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if guard.is_duplicate(f"{user.id}-{req.title}-{req.content}"):
        raise HTTPException(status_code=429, detail="잠시 후 다시 시도해주세요.")

    created = CreateQuestionUseCase(db).execute(user.id, req.title, req.content, req.images)

    return _created_response(created, "질문이 등록되었습니다.")


@router.get("/{question_id}")
def get_question(question_id: int, db: Session = Depends(get_db)):
    question = db.get(Question, question_id)
    if not question:
        raise HTTPException(status_code=404, detail="질문을 찾을 수 없습니다.")
    return _question_dict(db, question)


@router.put("/{question_id}")
def update_question(
    question_id: int,
    req: UpdateQuestionRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        UpdateQuestionUseCase(db).execute(question_id, user, req.title, req.content)
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ContentPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "질문이 수정되었습니다."}


@router.delete("/{question_id}")
def delete_question(
    question_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """작성자 또는 운영진만 삭제 가능"""
    try:
        DeleteQuestionUseCase(db).execute(question_id, user)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ContentPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "질문이 삭제되었습니다."}


@router.post("/{question_id}/answers", status_code=201)
def create_answer(
    question_id: int,
    req: CreateAnswerRequest,
    user: User = Depends(require_active_user),
    db: Session = Depends(get_db),
    guard: DuplicateSubmissionGuard = Depends(get_submission_guard),
):
    """답변 작성"""
    try:
        validate_answer(req.content)
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if guard.is_duplicate(f"answer-{user.id}-{question_id}-{req.content}"):
        raise HTTPException(status_code=429, detail="잠시 후 다시 시도해주세요.")

    try:
        created = CreateAnswerUseCase(db).execute(question_id, user.id, req.content, req.images)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _created_response(created, "답변이 등록되었습니다.")
