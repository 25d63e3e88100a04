import logging
from typing import Any, Dict, Optional, Protocol

from realcheck.core.errors import MissingInput, RemoteCallFailure, UnparsableModelOutput
from realcheck.models.detection_models import ImageSubmission
from realcheck.services.prompt_manager import DETECTION_PROMPT, PromptManager
from realcheck.utils.data_url import decode_data_url
from realcheck.utils.json_extract import extract_json

logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    async def generate(self, image: bytes, mime_type: str, instruction: str) -> str:
        ...


class ImageDetector:
    def __init__(self, client: ModelClient, prompt_manager: Optional[PromptManager] = None):
        self.client = client
        self.instruction = (prompt_manager or PromptManager()).load_prompt(DETECTION_PROMPT)

    async def analyze(self, submission: ImageSubmission) -> Dict[str, Any]:
        """
        Returns whatever JSON object the model produced, normally:
        {
            "is_ai": True/False,
            "confidence": number (0-100),
            "reason": "text explanation"
        }
        """
        if not submission.imageBase64:
            raise MissingInput()

        image = decode_data_url(submission.imageBase64)
        logger.debug(f"Decoded {image.mime_type} image ({len(image.payload)} base64 chars)")

        try:
            raw = await self.client.generate(image.data, image.mime_type, self.instruction)
        except RemoteCallFailure:
            raise
        except Exception as e:
            logger.error(f"❌ Model call failed: {type(e).__name__}", exc_info=True)
            raise RemoteCallFailure(details=type(e).__name__) from e

        try:
            verdict = extract_json(raw)
        except UnparsableModelOutput:
            logger.error(f"Failed to parse model output: {raw!r}")
            raise

        logger.info(
            f"🔍 Verdict: is_ai={verdict.get('is_ai')} confidence={verdict.get('confidence')}"
        )
        return verdict
