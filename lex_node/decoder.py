"""
Decoding of Lex PostContent results into robot responses.

Lex sends the slots as a base64 encoded JSON object, so decoding happens in
two stages (base64 -> bytes, bytes -> ordered key/value pairs) that can be
exercised on their own.
"""

import base64
import binascii
import json
import logging
from typing import Any, List, Mapping, Optional

from .errors import DecodeFailureError
from .schemas import AudioTextConversationResponse, KeyValue, PostContentResult


logger = logging.getLogger(__name__)


def decode_base64_document(encoded: str) -> bytes:
    """Stage 1: base64 text to raw document bytes."""
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailureError(f"Slots are not valid base64: {e}") from e


def parse_slot_document(raw: bytes) -> List[KeyValue]:
    """
    Stage 2: JSON object bytes to slots, in document order.

    Trailing NUL bytes are dropped; some SDKs encode the C string terminator.
    """
    text = raw.rstrip(b"\x00")
    if not text.strip():
        return []
    try:
        document = json.loads(text.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeFailureError(f"Slots are not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise DecodeFailureError(
            f"Slots must be a JSON object, got {type(document).__name__}"
        )
    return [KeyValue(key=key, value=_slot_value(value)) for key, value in document.items()]


def _slot_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def decode_slots(encoded: Optional[str]) -> List[KeyValue]:
    """Decode the slots header; absent or empty slots give no entries."""
    if not encoded:
        return []
    return parse_slot_document(decode_base64_document(encoded))


def encode_slots(slots: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Encode a slot mapping the way Lex sends it on the wire."""
    if slots is None:
        return None
    return base64.b64encode(json.dumps(dict(slots)).encode("utf-8")).decode("ascii")


def drain_audio(stream: Any) -> bytes:
    """
    Read an audio body fully and close it.

    An absent stream gives empty audio. Read errors propagate to the caller.
    """
    if stream is None:
        return b""
    if isinstance(stream, (bytes, bytearray)):
        return bytes(stream)
    try:
        data = stream.read() or b""
    finally:
        close = getattr(stream, "close", None)
        if close is not None:
            close()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data


def decode_result(result: PostContentResult) -> AudioTextConversationResponse:
    """
    Convert a drained PostContent result into a robot response.

    Missing fields become empty values. The result is not modified.

    Raises:
        DecodeFailureError: if the slots cannot be decoded or the audio
            stream was never drained
    """
    if result.audio_bytes is None and result.audio_stream is not None:
        raise DecodeFailureError("Audio stream has not been drained")

    slots = decode_slots(result.slots)
    response = AudioTextConversationResponse(
        text_response=result.message or "",
        audio_response=result.audio_bytes or b"",
        slots=slots,
        intent_name=result.intent_name or "",
        message_format_type=result.message_format.value if result.message_format else "",
        dialog_state=result.dialog_state.value if result.dialog_state else "",
    )
    logger.debug(
        "Decoded Lex result: intent=%s dialog_state=%s slots=%d audio_bytes=%d",
        response.intent_name,
        response.dialog_state,
        len(response.slots),
        len(response.audio_response),
    )
    return response
