import json
from typing import Any, Dict, Optional

from realcheck.core.errors import UnparsableModelOutput


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def extract_json(text: Optional[str]) -> Dict[str, Any]:
    """
    Recover a JSON object from free-form model output.

    Tries the trimmed text as-is first, then the span from the first "{"
    to the last "}". Raises UnparsableModelOutput (carrying the raw text)
    when neither yields an object.
    """
    if not text:
        raise UnparsableModelOutput(model_output=text)

    parsed = _load_object(text.strip())
    if parsed is not None:
        return parsed

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        parsed = _load_object(text[start:end + 1])
        if parsed is not None:
            return parsed

    raise UnparsableModelOutput(model_output=text)
