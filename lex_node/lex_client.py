"""
Lex runtime clients.

``LexRuntimeClient`` is the one capability the interactor needs from the
remote service. ``BotoLexRuntimeClient`` talks to Amazon Lex through boto3.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .decoder import encode_slots
from .errors import LexServiceError
from .parameters import ParameterPath, ParameterReader
from .schemas import DialogState, MessageFormatType, PostContentRequest, PostContentResult


logger = logging.getLogger(__name__)


CLIENT_CONFIGURATION_PREFIX = "aws_client_configuration"

E = TypeVar("E")


class LexRuntimeClient(ABC):
    """Remote side of a Lex conversation."""

    @abstractmethod
    def post_content(self, request: PostContentRequest) -> PostContentResult:
        """
        Send user input to the bot.

        Raises:
            LexServiceError: on any failure reported by the service or transport
        """


@dataclass
class ClientConfiguration:
    """Transport settings passed through to botocore."""

    region: Optional[str] = None
    connect_timeout_ms: int = 1000
    request_timeout_ms: int = 3000
    max_retries: int = 3
    endpoint_override: Optional[str] = None

    @classmethod
    def from_params(cls, reader: ParameterReader, separator: str = "/") -> "ClientConfiguration":
        def key(name: str) -> str:
            return ParameterPath(CLIENT_CONFIGURATION_PREFIX, name).join(separator)

        config = cls()
        region = reader.read_str(key("region"))
        if region:
            config.region = region
        for name in ("connect_timeout_ms", "request_timeout_ms", "max_retries"):
            value = reader.read_int(key(name))
            if value is not None:
                setattr(config, name, value)
        endpoint = reader.read_str(key("endpoint_override"))
        if endpoint:
            config.endpoint_override = endpoint
        return config

    def to_botocore(self) -> Config:
        return Config(
            region_name=self.region,
            connect_timeout=self.connect_timeout_ms / 1000.0,
            read_timeout=self.request_timeout_ms / 1000.0,
            retries={"max_attempts": self.max_retries},
        )


class BotoLexRuntimeClient(LexRuntimeClient):
    """Amazon Lex runtime client backed by boto3."""

    def __init__(
        self,
        client_configuration: Optional[ClientConfiguration] = None,
        session: Optional[boto3.session.Session] = None,
        client: Any = None,
    ):
        self.client_configuration = client_configuration or ClientConfiguration()
        if client is None:
            session = session or boto3.session.Session()
            client = session.client(
                "lex-runtime",
                config=self.client_configuration.to_botocore(),
                endpoint_url=self.client_configuration.endpoint_override,
            )
        self._client = client

    @classmethod
    def from_params(
        cls,
        reader: ParameterReader,
        separator: str = "/",
        session: Optional[boto3.session.Session] = None,
    ) -> "BotoLexRuntimeClient":
        return cls(ClientConfiguration.from_params(reader, separator), session=session)

    def post_content(self, request: PostContentRequest) -> PostContentResult:
        kwargs: Dict[str, Any] = {
            "botName": request.bot_name,
            "botAlias": request.bot_alias,
            "userId": request.user_id,
            "contentType": request.content_type,
            "inputStream": request.input_stream,
        }
        if request.accept_type:
            kwargs["accept"] = request.accept_type
        if request.session_attributes is not None:
            kwargs["sessionAttributes"] = request.session_attributes
        if request.request_attributes is not None:
            kwargs["requestAttributes"] = request.request_attributes

        try:
            response = self._client.post_content(**kwargs)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise LexServiceError(
                error.get("Message", str(e)), code=error.get("Code", "Unknown")
            ) from e
        except BotoCoreError as e:
            raise LexServiceError(str(e), code=type(e).__name__) from e

        return self._to_result(response)

    @staticmethod
    def _to_result(response: Dict[str, Any]) -> PostContentResult:
        # botocore already decodes the JSON headers; slots go back to wire form
        session_attributes = response.get("sessionAttributes")
        if session_attributes is not None and not isinstance(session_attributes, str):
            session_attributes = json.dumps(session_attributes)

        return PostContentResult(
            content_type=response.get("contentType"),
            intent_name=response.get("intentName"),
            slots=encode_slots(response.get("slots")),
            session_attributes=session_attributes,
            message=response.get("message"),
            message_format=_enum_or_none(MessageFormatType, response.get("messageFormat")),
            dialog_state=_enum_or_none(DialogState, response.get("dialogState")),
            slot_to_elicit=response.get("slotToElicit"),
            audio_stream=response.get("audioStream"),
        )


def _enum_or_none(enum_type: Type[E], value: Optional[str]) -> Optional[E]:
    if not value:
        return None
    try:
        return enum_type(value)
    except ValueError:
        logger.warning("Unknown %s value from Lex: %s", enum_type.__name__, value)
        return None
