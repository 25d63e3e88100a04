import base64
import binascii
import re
from dataclasses import dataclass
from typing import Union

from realcheck.core.errors import MalformedInput

# header part only, e.g. "data:image/png;base64" or "data:image/png;name=a.png;base64"
DATA_URL_HEADER = re.compile(r"^data:([^;,=\s]+)(?:;[^;,=\s]+=[^;,]*)*;base64$")


@dataclass(frozen=True)
class DecodedImage:
    mime_type: str
    payload: str  # base64 text exactly as received

    @property
    def data(self) -> bytes:
        return base64.b64decode(self.payload)


def decode_data_url(text: str) -> DecodedImage:
    """Split a data URL into its MIME type and base64 payload.

    Anything that does not look like ``data:<mime>;base64,<payload>`` is
    rejected with MalformedInput; there is no default MIME type.
    """
    if not isinstance(text, str) or "," not in text:
        raise MalformedInput("Invalid data URL: expected 'data:<mime>;base64,<payload>'.")

    header, payload = text.split(",", 1)
    match = DATA_URL_HEADER.match(header.strip())
    if not match:
        raise MalformedInput("Invalid data URL: could not determine image MIME type.")
    if not payload:
        raise MalformedInput("Invalid base64 format received.")

    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedInput("Invalid base64 format received.")

    return DecodedImage(mime_type=match.group(1), payload=payload)


def encode_data_url(mime_type: str, payload: Union[bytes, str]) -> str:
    if isinstance(payload, bytes):
        payload = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};base64,{payload}"
