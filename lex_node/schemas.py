"""
Pydantic schemas for the Lex conversation node.

These schemas define the data contracts on both sides of the node:
- Robot side: AudioTextConversationRequest / AudioTextConversationResponse
- Lex side: PostContentRequest / PostContentResult
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageFormatType(str, Enum):
    """Format of the message Lex answered with."""

    PLAIN_TEXT = "PlainText"
    CUSTOM_PAYLOAD = "CustomPayload"
    SSML = "SSML"
    COMPOSITE = "Composite"


class DialogState(str, Enum):
    """Where the Lex dialog currently stands."""

    ELICIT_INTENT = "ElicitIntent"
    CONFIRM_INTENT = "ConfirmIntent"
    ELICIT_SLOT = "ElicitSlot"
    FULFILLED = "Fulfilled"
    READY_FOR_FULFILLMENT = "ReadyForFulfillment"
    FAILED = "Failed"


class KeyValue(BaseModel):
    """A single slot extracted by the bot."""

    key: str = ""
    value: str = ""


class AudioTextConversationRequest(BaseModel):
    """Request coming from the robot."""

    content_type: str = Field(default="", description="MIME type of the request body")
    accept_type: str = Field(default="", description="MIME type the robot wants back")
    text_request: str = Field(default="", description="Typed or transcribed utterance")
    audio_request: bytes = Field(default=b"", description="Raw audio utterance")


class AudioTextConversationResponse(BaseModel):
    """
    Response handed back to the robot.

    A default-constructed response means no call succeeded into it.
    """

    text_response: str = ""
    audio_response: bytes = b""
    slots: List[KeyValue] = Field(default_factory=list)
    intent_name: str = ""
    message_format_type: str = ""
    dialog_state: str = ""

    def is_empty(self) -> bool:
        return self == AudioTextConversationResponse()


class PostContentRequest(BaseModel):
    """Lex PostContent request."""

    bot_name: str
    bot_alias: str
    user_id: str
    content_type: str
    accept_type: str = ""
    input_stream: bytes = b""
    session_attributes: Optional[Dict[str, str]] = None
    request_attributes: Optional[Dict[str, str]] = None


class PostContentResult(BaseModel):
    """
    Lex PostContent result.

    ``slots`` holds the base64 encoded JSON document as sent on the wire.
    ``audio_stream`` is drained by the interactor while the call is in
    flight; the bytes are kept in ``audio_bytes`` and the stream dropped.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content_type: Optional[str] = None
    intent_name: Optional[str] = None
    slots: Optional[str] = None
    session_attributes: Optional[str] = None
    message: Optional[str] = None
    message_format: Optional[MessageFormatType] = None
    dialog_state: Optional[DialogState] = None
    slot_to_elicit: Optional[str] = None
    audio_stream: Optional[Any] = Field(default=None, description="Binary stream with the audio body")
    audio_bytes: Optional[bytes] = None
