"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse

from app.config import get_settings
from app.infrastructure.db.session import check_db_connection
from app.api.v1 import auth, users, questions, answers, rankings, ai

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logs the traceback of any unhandled route error and answers 500."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            body = {"error": "서버 내부 오류가 발생했습니다."}
            if self.debug:
                body["message"] = str(exc)
            return JSONResponse(body, status_code=500)


def create_app() -> FastAPI:
    """
    Application factory: FastAPI 앱 생성 및 설정
    """
    settings = get_settings()

    app = FastAPI(
        title="GARS Q&A Hub",
        debug=settings.DEBUG,
    )

    app.add_middleware(ErrorLoggingMiddleware, debug=settings.DEBUG)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY
    )

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(questions.router)
    app.include_router(answers.router)
    app.include_router(rankings.router)
    app.include_router(ai.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (DB 연결 확인)"""
        check_db_connection()
        return "ok"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
