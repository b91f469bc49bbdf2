"""
Lex Node.

Robot-facing side of the conversation: holds the interactor, posts robot
requests through it and fills the robot response only when the whole call
succeeded.
"""

import logging
from typing import Optional

import boto3

from .configuration import LexConfiguration
from .decoder import decode_result
from .errors import ErrorCode, InvalidArgumentError, LexNodeError
from .interactor import LexInteractor, build_lex_interactor
from .lex_client import LexRuntimeClient
from .parameters import ParameterReader
from .schemas import AudioTextConversationRequest, AudioTextConversationResponse


logger = logging.getLogger(__name__)


class LexNode:
    """
    Owns the Lex interactor of a robot.

    ``init`` binds the interactor once; there is no way to rebind it.
    """

    def __init__(self):
        self._interactor: Optional[LexInteractor] = None

    @property
    def is_built(self) -> bool:
        return self._interactor is not None

    def init(self, interactor: Optional[LexInteractor]) -> ErrorCode:
        if interactor is None:
            logger.error("Cannot init Lex node without an interactor")
            return ErrorCode.INVALID_ARGUMENT
        if self._interactor is not None:
            logger.error("Lex node already owns an interactor")
            return ErrorCode.INVALID_ARGUMENT
        self._interactor = interactor
        return ErrorCode.SUCCESS

    def _require_interactor(self) -> LexInteractor:
        if self._interactor is None:
            raise InvalidArgumentError("Lex node has not been built")
        return self._interactor

    def post_content(
        self,
        request: AudioTextConversationRequest,
        response: AudioTextConversationResponse,
    ) -> bool:
        """
        Post a robot request to Lex and fill ``response``.

        Returns:
            True when ``response`` was filled; False leaves it untouched.
        """
        try:
            result = self._require_interactor().post_content(request)
            decoded = decode_result(result)
        except LexNodeError as e:
            logger.warning("PostContent failed: %s (%s)", e, e.error_code.value)
            return False

        for name in AudioTextConversationResponse.model_fields:
            setattr(response, name, getattr(decoded, name))
        return True


def build_lex_node(
    lex_node: LexNode,
    reader: ParameterReader,
    separator: str = "/",
    client: Optional[LexRuntimeClient] = None,
    session: Optional[boto3.session.Session] = None,
) -> ErrorCode:
    """Build an interactor from parameters and hand it to ``lex_node``."""
    error_code, interactor = build_lex_interactor(
        reader, separator, client=client, session=session
    )
    if error_code != ErrorCode.SUCCESS:
        return error_code
    return lex_node.init(interactor)


def post_content(
    request: AudioTextConversationRequest,
    response: AudioTextConversationResponse,
    configuration: LexConfiguration,
    client: LexRuntimeClient,
) -> bool:
    """One-shot PostContent with an explicit configuration and client."""
    if not configuration.validate():
        logger.error("Invalid Lex configuration for one-shot PostContent")
        return False
    lex_node = LexNode()
    lex_node.init(LexInteractor(configuration, client))
    return lex_node.post_content(request, response)
