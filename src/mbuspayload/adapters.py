"""Entry points for the environments that hand payloads to the decoder.

Both adapters forward to decode() and let its errors propagate unchanged.
"""

from __future__ import annotations

from collections.abc import MutableMapping, Sequence
from typing import Any

from .decoder import decode


def network_decoder(payload: bytes | Sequence[int], port: int) -> dict[str, Any]:
    """Network server uplink decoder.

    Args:
        payload: Application payload
        port: Application port the payload arrived on (not used for decoding)

    Returns:
        Mapping with the decoded fields under "fields"
    """
    return {"fields": [field.as_dict() for field in decode(payload)]}


def pipeline_decoder(message: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Message pipeline node: decode message["payload"] into message["fields"].

    The message is modified in place and returned.
    """
    message["fields"] = [field.as_dict() for field in decode(message["payload"])]
    return message
