import logging
import openai
from tenacity import retry, stop_after_attempt, wait_exponential

from app.core.config import settings

logger = logging.getLogger(__name__)


class LLMService:
    def __init__(self):
        # Any OpenAI-compatible endpoint
        self.model = settings.AI_MODEL
        self.client = openai.OpenAI(
            api_key=settings.AI_API_KEY,
            base_url=settings.AI_BASE_URL,
        )

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=4, max=10))
    def complete(self, prompt: str, temperature: float = 0.7, max_tokens: int = 800) -> str:
        """
        Single-turn completion; returns the stripped message text.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "You are a helpful sales CRM assistant."},
                    {"role": "user", "content": prompt}
                ],
                temperature=temperature,
                max_tokens=max_tokens,
                stream=False
            )
            return (response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.warning(f"LLM call failed: {e}")
            raise
