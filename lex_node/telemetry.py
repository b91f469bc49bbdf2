"""
Tracing and metrics for calls to Lex.
"""

import time
from contextlib import contextmanager
from typing import Iterator

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from prometheus_client import Counter, Histogram

from .configuration import LexConfiguration


tracer = trace.get_tracer("lex_node")

POST_CONTENT_CALLS = Counter(
    "lex_post_content_total",
    "PostContent calls made to Lex",
    ["bot_name", "outcome"],
)

POST_CONTENT_LATENCY = Histogram(
    "lex_post_content_latency_seconds",
    "PostContent round trip latency",
    ["bot_name"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


@contextmanager
def traced_post_content(configuration: LexConfiguration) -> Iterator[trace.Span]:
    """Wrap one PostContent round trip in a span and record its outcome."""
    start = time.perf_counter()
    with tracer.start_as_current_span(
        "lex.post_content",
        kind=trace.SpanKind.CLIENT,
        record_exception=False,
        set_status_on_exception=False,
        attributes={
            "lex.bot_name": configuration.bot_name,
            "lex.bot_alias": configuration.bot_alias,
        },
    ) as span:
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            POST_CONTENT_CALLS.labels(bot_name=configuration.bot_name, outcome="failure").inc()
            raise
        else:
            POST_CONTENT_CALLS.labels(bot_name=configuration.bot_name, outcome="success").inc()
        finally:
            POST_CONTENT_LATENCY.labels(bot_name=configuration.bot_name).observe(
                time.perf_counter() - start
            )
