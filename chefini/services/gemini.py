"""
Chefini API - Gemini AI Service.

Centralized Gemini API client. Every AI feature (recipe generation, batch
plans, flavor debugging, content moderation) is one blocking completion
round trip through `GeminiService.complete`.
"""

import logging
from typing import Optional

from google import genai
from google.genai import types

from settings import settings
from chefini.utils.errors import UpstreamServiceError


logger = logging.getLogger(__name__)


class GeminiService:
    """
    Gemini API service for AI-powered features.

    The underlying client is created on first use so the app can start
    without reaching the provider.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise UpstreamServiceError(
                    "AI service is not configured",
                    detail="GEMINI_API_KEY missing",
                    status_code=500
                )
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        json_mode: bool = False
    ) -> str:
        """
        Request one completion.

        Args:
            system_prompt: System instruction for the model.
            user_prompt: The user turn.
            temperature: Sampling temperature.
            max_tokens: Output token cap.
            json_mode: Ask the provider for a JSON mime type.

        Returns:
            Raw completion text (may be empty).

        Raises:
            UpstreamServiceError: 503 when the provider call fails.
        """
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json" if json_mode else None,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=user_prompt,
                config=config,
            )
        except UpstreamServiceError:
            raise
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise UpstreamServiceError(
                "AI service error. Please try again.",
                detail=str(e)
            ) from e

        text = response.text or ""
        logger.info(f"AI response received, length: {len(text)}")
        return text


# Singleton instance
gemini_service = GeminiService()
