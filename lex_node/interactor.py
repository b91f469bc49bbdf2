"""
Lex Interactor.

Lex keeps an internal conversation session per user, so a single
interactor is the only point of entry into that session. Calls made on the
same interactor are serialized and never overlap on the wire.
"""

import logging
import threading
from typing import Optional, Tuple

import boto3

from .configuration import TEXT_MIME_TYPE, LexConfiguration
from .decoder import drain_audio
from .errors import ErrorCode, InvalidConfigurationError, LexServiceError, RemoteCallFailedError
from .lex_client import BotoLexRuntimeClient, LexRuntimeClient
from .parameters import ParameterReader
from .schemas import AudioTextConversationRequest, PostContentRequest, PostContentResult
from .telemetry import traced_post_content


logger = logging.getLogger(__name__)


class LexInteractor:
    """
    Owner of one Lex conversation session.

    Example:
        >>> interactor = LexInteractor(configuration, BotoLexRuntimeClient())
        >>> result = interactor.post_content(
        ...     AudioTextConversationRequest(
        ...         content_type="text/plain; charset=utf-8",
        ...         text_request="make a reservation",
        ...     )
        ... )
    """

    def __init__(self, configuration: LexConfiguration, client: LexRuntimeClient):
        self.configuration = configuration
        self._client = client
        self._lock = threading.Lock()

    @property
    def session_key(self) -> tuple:
        return self.configuration.session_key

    def build_request(self, request: AudioTextConversationRequest) -> PostContentRequest:
        """Build the Lex request for a robot request and the bound bot."""
        content_type = request.content_type or TEXT_MIME_TYPE
        if content_type.startswith("text/"):
            input_stream = request.text_request.encode("utf-8")
        else:
            input_stream = bytes(request.audio_request)

        return PostContentRequest(
            bot_name=self.configuration.bot_name,
            bot_alias=self.configuration.bot_alias,
            user_id=self.configuration.user_id,
            content_type=content_type,
            accept_type=request.accept_type or self.configuration.content_type.mime_type,
            input_stream=input_stream,
        )

    def post_content(self, request: AudioTextConversationRequest) -> PostContentResult:
        """
        Post the request to Lex once.

        Blocks while another call on this session is in flight.

        Raises:
            RemoteCallFailedError: if the client or the audio body read fails
        """
        lex_request = self.build_request(request)
        with self._lock:
            logger.debug(
                "PostContent bot=%s alias=%s content_type=%s bytes=%d",
                lex_request.bot_name,
                lex_request.bot_alias,
                lex_request.content_type,
                len(lex_request.input_stream),
            )
            try:
                with traced_post_content(self.configuration):
                    result = self._client.post_content(lex_request)
                    # The body is still part of the HTTP response
                    audio = drain_audio(result.audio_stream)
                    return result.model_copy(update={"audio_stream": None, "audio_bytes": audio})
            except LexServiceError as e:
                logger.error("Lex PostContent failed (%s): %s", e.code, e)
                raise RemoteCallFailedError(str(e)) from e
            except Exception as e:
                logger.exception("Lex client raised during PostContent")
                raise RemoteCallFailedError(str(e)) from e


def build_lex_interactor(
    reader: ParameterReader,
    separator: str = "/",
    client: Optional[LexRuntimeClient] = None,
    session: Optional[boto3.session.Session] = None,
) -> Tuple[ErrorCode, Optional[LexInteractor]]:
    """
    Build an interactor from parameters.

    Returns:
        (ErrorCode.SUCCESS, interactor) or (error code, None)
    """
    try:
        configuration = LexConfiguration.from_params(reader, separator)
    except InvalidConfigurationError as e:
        logger.error("Invalid Lex configuration: %s", e)
        return e.error_code, None

    if not configuration.validate():
        logger.error(
            "Lex configuration requires user_id, bot_name and bot_alias (got %r, %r, %r)",
            configuration.user_id,
            configuration.bot_name,
            configuration.bot_alias,
        )
        return ErrorCode.INVALID_LEX_CONFIGURATION, None

    if client is None:
        client = BotoLexRuntimeClient.from_params(reader, separator, session=session)

    logger.info(
        "Built Lex interactor for bot %s (alias %s)", configuration.bot_name, configuration.bot_alias
    )
    return ErrorCode.SUCCESS, LexInteractor(configuration, client)
