from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from .exceptions import DataUriError

# data:<mime>;base64,<payload>
_DATA_URI = re.compile(r"^data:(?P<mime>[^;,]+);base64,(?P<payload>.*)$", re.DOTALL)


@dataclass(frozen=True)
class DataUriPayload:
    """
    Decoded data URI.

    mime_type is the literal text between 'data:' and ';base64', case kept.
    """
    mime_type: str
    data: bytes

    def __len__(self) -> int:
        return len(self.data)


def data_uri_to_binary(data_uri: str) -> DataUriPayload:
    """
    Decode a base64 data URI into its MIME type and raw bytes.

    :param data_uri: string of the form data:<mime>;base64,<payload>
    :return: DataUriPayload
    :raises DataUriError: if the string does not follow that grammar or the
        payload is not valid base64
    """
    if not isinstance(data_uri, str):
        raise DataUriError(f"Data URI must be a string, got {type(data_uri).__name__}")

    match = _DATA_URI.match(data_uri)
    if match is None:
        head = data_uri.split(",", 1)[0][:64]
        raise DataUriError(f"Not a base64 data URI (expected data:<mime>;base64,<payload>): {head!r}")

    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except (ValueError, binascii.Error) as e:
        raise DataUriError(f"Invalid base64 payload in data URI: {e}") from e

    return DataUriPayload(mime_type=match.group("mime"), data=data)


def binary_to_data_uri(data: bytes, mime_type: str) -> str:
    """Inverse of data_uri_to_binary."""
    if not mime_type or ";" in mime_type or "," in mime_type:
        raise DataUriError(f"Invalid MIME type for data URI: {mime_type!r}")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
