"""
Gemini REST client for the AI question feature (text prompts only).
"""
import requests

from app.config import Settings, get_settings

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

MAX_ANSWER_LENGTH = 5000

PROMPT_TEMPLATE = """
당신은 학습 도우미입니다. 사용자의 질문에 교육적인 답변을 제공해주세요.

질문: {question}

질문을 분석하고 상세한 답변을 제공해주세요.
답변은 한국어로, 친근하고 이해하기 쉽게 작성해주세요.
"""


class AiServiceError(RuntimeError):
    """Gemini call failed or returned no usable text"""
    pass


class GeminiClient:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    @property
    def enabled(self) -> bool:
        return bool(self.settings.GEMINI_API_KEY)

    def answer(self, question: str) -> str:
        """
        Ask Gemini and return the answer text (truncated to MAX_ANSWER_LENGTH).

        Raises:
            AiServiceError: transport error, non-200 response or empty candidates
        """
        url = API_URL.format(model=self.settings.GEMINI_MODEL)
        try:
            resp = requests.post(
                url,
                params={"key": self.settings.GEMINI_API_KEY},
                json={"contents": [{"parts": [{"text": PROMPT_TEMPLATE.format(question=question.strip())}]}]},
                timeout=self.settings.GEMINI_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise AiServiceError(f"Gemini request failed: {exc}") from exc

        if resp.status_code != 200:
            raise AiServiceError(f"Gemini error (HTTP {resp.status_code})")

        try:
            parts = resp.json()["candidates"][0]["content"]["parts"]
            text = "".join(p.get("text", "") for p in parts).strip()
        except (ValueError, KeyError, IndexError) as exc:
            raise AiServiceError("Gemini response has no candidates") from exc

        if not text:
            raise AiServiceError("Gemini returned an empty answer")
        if len(text) > MAX_ANSWER_LENGTH:
            text = text[:MAX_ANSWER_LENGTH] + "..."
        return text
