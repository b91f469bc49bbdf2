"""
Lex conversation node for ROS 2 robots.

Provides:
- Lex bot configuration read from ROS parameters or YAML
- A single-entry interactor owning the Lex conversation session
- Decoding of Lex results (text, audio, slots, dialog state)
- The robot-facing node with boolean success semantics
"""

from .configuration import LexConfiguration, ResponseContentType
from .decoder import decode_result, decode_slots, encode_slots
from .errors import (
    DecodeFailureError,
    ErrorCode,
    InvalidArgumentError,
    InvalidConfigurationError,
    LexNodeError,
    LexServiceError,
    RemoteCallFailedError,
)
from .interactor import LexInteractor, build_lex_interactor
from .lex_client import BotoLexRuntimeClient, ClientConfiguration, LexRuntimeClient
from .node import LexNode, build_lex_node, post_content
from .parameters import DictParameterReader, ParameterReader, YamlParameterReader
from .schemas import (
    AudioTextConversationRequest,
    AudioTextConversationResponse,
    DialogState,
    KeyValue,
    MessageFormatType,
    PostContentRequest,
    PostContentResult,
)


__all__ = [
    # Configuration
    'LexConfiguration',
    'ResponseContentType',
    'ParameterReader',
    'DictParameterReader',
    'YamlParameterReader',
    # Errors
    'ErrorCode',
    'LexNodeError',
    'InvalidConfigurationError',
    'InvalidArgumentError',
    'RemoteCallFailedError',
    'DecodeFailureError',
    'LexServiceError',
    # Schemas
    'AudioTextConversationRequest',
    'AudioTextConversationResponse',
    'KeyValue',
    'MessageFormatType',
    'DialogState',
    'PostContentRequest',
    'PostContentResult',
    # Lex
    'LexRuntimeClient',
    'BotoLexRuntimeClient',
    'ClientConfiguration',
    'LexInteractor',
    'build_lex_interactor',
    'LexNode',
    'build_lex_node',
    'post_content',
    'decode_result',
    'decode_slots',
    'encode_slots',
]

__version__ = '1.0.0'
