"""
Classify a local image file through the same pipeline the API uses.

    python -m realcheck.scripts.check_image path/to/photo.jpg
"""
import argparse
import asyncio
import json
import mimetypes
import sys
from pathlib import Path

from realcheck.core.config import load_settings
from realcheck.core.errors import ConfigError, RealCheckError
from realcheck.main import setup_logging
from realcheck.models.detection_models import ImageSubmission
from realcheck.services.detector_service import ImageDetector
from realcheck.services.gemini_client import GeminiClient
from realcheck.services.prompt_manager import PromptManager
from realcheck.utils.data_url import encode_data_url


async def check(img_path: Path) -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"❌ {e}")
        return 1
    setup_logging(settings.log_level)

    if not img_path.exists():
        print(f"❌ Image not found at {img_path}")
        return 1

    mime_type, _ = mimetypes.guess_type(img_path.name)
    if not mime_type or not mime_type.startswith("image/"):
        print(f"❌ Not a recognised image type: {img_path.name}")
        return 1

    client = GeminiClient(settings.gemini_api_key, settings.gemini_model, settings.ai_timeout)
    detector = ImageDetector(client, PromptManager(settings.prompts_dir))

    print(f"📸 Checking {img_path.name} with {settings.gemini_model}")
    submission = ImageSubmission(imageBase64=encode_data_url(mime_type, img_path.read_bytes()))
    try:
        result = await detector.analyze(submission)
    except RealCheckError as e:
        print(json.dumps(e.to_response(), indent=2))
        return 1

    print("\n🔍 Result:")
    print(json.dumps(result, indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Check whether an image is AI-generated")
    parser.add_argument("image", type=Path, help="path to a local image file")
    args = parser.parse_args()
    sys.exit(asyncio.run(check(args.image)))


if __name__ == "__main__":
    main()
