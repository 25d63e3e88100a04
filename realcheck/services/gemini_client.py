import asyncio
import logging
from typing import Optional

import google.generativeai as genai

from realcheck.core.errors import RemoteCallFailure

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin async wrapper around a Gemini vision model."""

    def __init__(self, api_key: str, model_name: str, timeout: Optional[float] = None):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout = timeout
        self.model = genai.GenerativeModel(model_name)

    async def generate(self, image: bytes, mime_type: str, instruction: str) -> str:
        img_part = {"mime_type": mime_type, "data": image}
        kwargs = {}
        if self.timeout:
            kwargs["request_options"] = {"timeout": self.timeout}

        try:
            response = await asyncio.to_thread(
                self.model.generate_content,
                [img_part, instruction],
                **kwargs
            )
        except Exception as e:
            logger.error(f"❌ Gemini call to {self.model_name} failed: {type(e).__name__}", exc_info=True)
            raise RemoteCallFailure(details=type(e).__name__) from e

        # .text raises when the candidate was blocked or carries no parts
        try:
            return response.text or ""
        except ValueError as e:
            logger.warning(f"⚠️ Gemini returned no text: {e}")
            return ""
