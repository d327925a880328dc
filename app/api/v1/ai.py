"""
AI question endpoint (costs points)
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.application.ai_questions import (
    AiQuestionValidationError,
    AiUnavailableError,
    AskAiQuestionUseCase,
    InsufficientPointsError,
)
from app.application.users import UserNotFoundError
from app.infrastructure.ai.gemini import AiServiceError, GeminiClient
from app.infrastructure.db.models import User


router = APIRouter(prefix="/api/v1", tags=["ai"])


class AiQuestionRequest(BaseModel):
    question: str


def get_ai_client() -> GeminiClient:
    return GeminiClient()


@router.post("/ai-question")
def ask_ai_question(
    req: AiQuestionRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    client: GeminiClient = Depends(get_ai_client),
):
    """
    AI 질문: AI_QUESTION_COST 포인트 차감

    402 with `needed` when the balance is short; nothing is deducted then.
    """
    try:
        result = AskAiQuestionUseCase(db, client=client).execute(user.id, req.question)
    except AiQuestionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AiUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")
    except InsufficientPointsError as e:
        return JSONResponse(
            status_code=402,
            content={"error": "포인트가 부족합니다.", "needed": e.status.needed},
        )
    except AiServiceError:
        raise HTTPException(status_code=502, detail="AI 질문에 실패했습니다.")

    return {
        "success": True,
        "answer": result.answer,
        "message": "AI 답변이 생성되었습니다.",
        "pointsUsed": result.points_used,
        "remainingPoints": result.remaining_points,
    }
