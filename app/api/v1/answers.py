"""
Answer API endpoints (read / edit / delete)
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.application.content import (
    ContentNotFoundError,
    ContentPermissionError,
    ContentValidationError,
    DeleteAnswerUseCase,
    UpdateAnswerUseCase,
)
from app.infrastructure.db.models import Answer, User
from app.readmodels.questions_feed import get_images


router = APIRouter(prefix="/api/v1/answers", tags=["answers"])


class UpdateAnswerRequest(BaseModel):
    content: str


@router.get("/{answer_id}")
def get_answer(answer_id: int, db: Session = Depends(get_db)):
    answer = db.get(Answer, answer_id)
    if not answer:
        raise HTTPException(status_code=404, detail="답변을 찾을 수 없습니다.")
    return {
        "id": answer.id,
        "question_id": answer.question_id,
        "user_id": answer.user_id,
        "content": answer.content,
        "status": answer.status,
        "images": get_images(db, "answer", answer.id),
        "created_at": answer.created_at,
        "updated_at": answer.updated_at,
    }


@router.put("/{answer_id}")
def update_answer(
    answer_id: int,
    req: UpdateAnswerRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        UpdateAnswerUseCase(db).execute(answer_id, user, req.content)
    except ContentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ContentPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "답변이 수정되었습니다."}


@router.delete("/{answer_id}")
def delete_answer(
    answer_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Score is reversed; experience and points are not."""
    try:
        DeleteAnswerUseCase(db).execute(answer_id, user)
    except ContentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ContentPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "답변이 삭제되었습니다."}
