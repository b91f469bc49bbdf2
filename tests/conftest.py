"""Shared fixtures for the Lex node tests."""

import base64
import io
import threading
import time
from typing import List, Optional

import pytest

from lex_node.configuration import LexConfiguration
from lex_node.errors import LexServiceError
from lex_node.lex_client import LexRuntimeClient
from lex_node.parameters import DictParameterReader
from lex_node.schemas import (
    AudioTextConversationRequest,
    DialogState,
    MessageFormatType,
    PostContentRequest,
    PostContentResult,
)


# The slot document is encoded with its C string terminator, as Lex SDKs send it
SLOT_DOCUMENT = (
    b'{"test_slots_key1": "test_slots_value1", "test_slots_key2": "test_slots_value2"}\x00'
)


def make_success_result() -> PostContentResult:
    return PostContentResult(
        content_type="test_content_type",
        intent_name="test_intent_name",
        slots=base64.b64encode(SLOT_DOCUMENT).decode("ascii"),
        session_attributes="test_session_attributes",
        message="test_message",
        message_format=MessageFormatType.CUSTOM_PAYLOAD,
        dialog_state=DialogState.FAILED,
        slot_to_elicit="test_active_slot",
        audio_stream=io.BytesIO(b"blah blah blah"),
    )


def make_drained_result() -> PostContentResult:
    return make_success_result().model_copy(
        update={"audio_stream": None, "audio_bytes": b"blah blah blah"}
    )


class StubLexRuntimeClient(LexRuntimeClient):
    """Deterministic Lex client recording the requests it receives."""

    def __init__(self, succeed: bool = False, delay: float = 0.0, result: Optional[PostContentResult] = None):
        self.succeed = succeed
        self.delay = delay
        self.result = result
        self.requests: List[PostContentRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._counter_lock = threading.Lock()

    def post_content(self, request: PostContentRequest) -> PostContentResult:
        with self._counter_lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.requests.append(request)
        try:
            if self.delay:
                time.sleep(self.delay)
            if not self.succeed:
                raise LexServiceError("Bot not found", code="NotFoundException")
            return self.result if self.result is not None else make_success_result()
        finally:
            with self._counter_lock:
                self.in_flight -= 1


def make_param_reader(user_id: str = "", bot_name: str = "", bot_alias: str = "") -> DictParameterReader:
    return DictParameterReader({
        "aws_client_configuration/connect_timeout_ms": 9000,
        "aws_client_configuration/request_timeout_ms": 9000,
        "aws_client_configuration/region": "us-west-2",
        "lex_configuration/user_id": user_id,
        "lex_configuration/bot_name": bot_name,
        "lex_configuration/bot_alias": bot_alias,
    })


@pytest.fixture
def configuration() -> LexConfiguration:
    return LexConfiguration(user_id="test_user", bot_name="test_bot", bot_alias="superbot")


@pytest.fixture
def param_reader(configuration) -> DictParameterReader:
    return make_param_reader(configuration.user_id, configuration.bot_name, configuration.bot_alias)


@pytest.fixture
def text_request() -> AudioTextConversationRequest:
    return AudioTextConversationRequest(
        content_type="text/plain; charset=utf-8",
        accept_type="text/plain; charset=utf-8",
        text_request="make a reservation",
    )
