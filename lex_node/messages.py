"""
Mapping between lex_common_msgs service messages and the node schemas.

The ROS message classes are passed in rather than imported so this module
does not need a sourced ROS workspace.
"""

from typing import Any, Callable

from .schemas import AudioTextConversationRequest, AudioTextConversationResponse


def request_from_msg(msg: Any) -> AudioTextConversationRequest:
    """Build a request schema from an AudioTextConversation request message."""
    audio = getattr(msg, "audio_request", None)
    # audio_common_msgs/AudioData keeps the bytes in ``data``
    data = getattr(audio, "data", audio) if audio is not None else b""
    return AudioTextConversationRequest(
        content_type=msg.content_type,
        accept_type=msg.accept_type,
        text_request=msg.text_request,
        audio_request=bytes(data or b""),
    )


def fill_response_msg(
    response: AudioTextConversationResponse,
    msg: Any,
    key_value_factory: Callable[[], Any],
) -> Any:
    """Copy a response schema into an AudioTextConversation response message."""
    msg.text_response = response.text_response
    if hasattr(msg.audio_response, "data"):
        msg.audio_response.data = list(response.audio_response)
    else:
        msg.audio_response = list(response.audio_response)

    slots = []
    for slot in response.slots:
        key_value = key_value_factory()
        key_value.key = slot.key
        key_value.value = slot.value
        slots.append(key_value)
    msg.slots = slots

    msg.intent_name = response.intent_name
    msg.message_format_type = response.message_format_type
    msg.dialog_state = response.dialog_state
    return msg
