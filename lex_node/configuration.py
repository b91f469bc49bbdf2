"""
Lex bot configuration.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfigurationError
from .parameters import ParameterPath, ParameterReader


logger = logging.getLogger(__name__)


LEX_CONFIGURATION_PREFIX = "lex_configuration"

USER_ID_KEY = ParameterPath(LEX_CONFIGURATION_PREFIX, "user_id")
BOT_NAME_KEY = ParameterPath(LEX_CONFIGURATION_PREFIX, "bot_name")
BOT_ALIAS_KEY = ParameterPath(LEX_CONFIGURATION_PREFIX, "bot_alias")
CONTENT_TYPE_KEY = ParameterPath(LEX_CONFIGURATION_PREFIX, "content_type")

TEXT_MIME_TYPE = "text/plain; charset=utf-8"
AUDIO_MIME_TYPE = "audio/pcm"


class ResponseContentType(str, Enum):
    """Kind of content the bot should answer with."""

    TEXT = "text"
    AUDIO = "audio"

    @property
    def mime_type(self) -> str:
        return TEXT_MIME_TYPE if self is ResponseContentType.TEXT else AUDIO_MIME_TYPE


@dataclass(frozen=True)
class LexConfiguration:
    """
    Identity of the bot conversation.

    Immutable once built. ``user_id`` keys the remote session, so the same
    user id continues the same dialog across calls.
    """

    user_id: str = ""
    bot_name: str = ""
    bot_alias: str = ""
    # Response content used when a request leaves accept_type empty
    content_type: ResponseContentType = ResponseContentType.TEXT

    @property
    def session_key(self) -> tuple:
        return (self.user_id, self.bot_name, self.bot_alias)

    def validate(self) -> bool:
        """Check that the bot identity is complete."""
        return bool(self.user_id and self.bot_name and self.bot_alias)

    @classmethod
    def from_params(cls, reader: ParameterReader, separator: str = "/") -> "LexConfiguration":
        """
        Read the configuration from a parameter reader.

        Missing identity keys are left empty so ``validate`` can report them.

        Raises:
            InvalidConfigurationError: if content_type names an unknown kind
        """
        values = {}
        for field_name, path in (
            ("user_id", USER_ID_KEY),
            ("bot_name", BOT_NAME_KEY),
            ("bot_alias", BOT_ALIAS_KEY),
        ):
            value = reader.read_str(path.join(separator))
            if value is None:
                logger.warning("Lex parameter %s not found", path.join(separator))
                value = ""
            values[field_name] = value

        content_type = reader.read_str(CONTENT_TYPE_KEY.join(separator))
        if content_type:
            try:
                values["content_type"] = ResponseContentType(content_type.lower())
            except ValueError as e:
                raise InvalidConfigurationError(
                    f"Unsupported content_type {content_type!r}"
                ) from e

        return cls(**values)
