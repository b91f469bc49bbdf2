"""
Process-wide runtime for the Lex node.

Logging and the boto3 session are set up once when the process starts and
released once when it stops:

    with sdk_runtime(log_level="DEBUG") as runtime:
        client = BotoLexRuntimeClient(session=runtime.session)
        ...
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import boto3

from .logging_config import DEFAULT_LOG_LEVEL, configure_logging


logger = logging.getLogger(__name__)


@dataclass
class SdkRuntime:
    """Resources shared by every Lex client in the process."""

    session: boto3.session.Session
    log_handler: logging.Handler


@contextmanager
def sdk_runtime(
    log_level: str = DEFAULT_LOG_LEVEL,
    json_logs: bool = False,
    profile_name: Optional[str] = None,
    region_name: Optional[str] = None,
) -> Iterator[SdkRuntime]:
    """Acquire the runtime for the duration of the ``with`` block."""
    handler = configure_logging(log_level, json_output=json_logs)
    session = boto3.session.Session(profile_name=profile_name, region_name=region_name)
    logger.info("Lex SDK runtime started (region=%s)", session.region_name)
    try:
        yield SdkRuntime(session=session, log_handler=handler)
    finally:
        logger.info("Lex SDK runtime shutting down")
        logging.getLogger("lex_node").removeHandler(handler)
        handler.close()
