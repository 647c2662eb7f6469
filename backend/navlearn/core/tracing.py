"""
OpenTelemetry tracing for the NavLearn backend.

Spans cover document extraction, knowledge ingestion and answer matching.
Session tokens, passwords and trainee emails are masked, and free text
(questions, document text) is truncated before it reaches a span.
"""

import os
import re
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

_SECRET_KEYS = ("token", "password", "secret")
_TEXT_KEYS = ("question", "text", "sentence", "title")


def setup_tracing(service_name: str = "navlearn-backend") -> TracerProvider:
    """
    Initialize OpenTelemetry tracing.

    Environment variables:
    - OTEL_EXPORTER_OTLP_ENDPOINT: OTLP collector endpoint (default: http://localhost:4317)
    - OTEL_TRACES_EXPORTER: "otlp", "console", or "none" (default: console)
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    exporter_type = os.getenv("OTEL_TRACES_EXPORTER", "console").lower()

    if exporter_type == "otlp":
        endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True)))
    elif exporter_type == "console":
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider


def get_tracer(name: str = __name__) -> trace.Tracer:
    """Get a tracer instance for creating spans."""
    return trace.get_tracer(name)


def mask_token(token: str | None) -> str:
    """
    Mask a session token for logs and spans.

    Session tokens are 32 hex characters; only the first 6 are kept.
    """
    if not token:
        return "<none>"

    if len(token) <= 12:
        return "***"

    return f"{token[:6]}..."


def mask_email(email: str | None) -> str:
    """Keep the first character and the domain of an email address."""
    if not email:
        return "<none>"

    match = re.match(r"^([^@])([^@]*)(@.+)$", email)
    if match:
        first_char, rest, domain = match.groups()
        return f"{first_char}{'*' * min(len(rest), 5)}{domain}"

    return "***@***"


def truncate_text(text: str | None, max_length: int = 80) -> str:
    if not text:
        return "<empty>"

    text = " ".join(text.split())
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def safe_span_attributes(**kwargs: Any) -> dict[str, Any]:
    """
    Build span attributes with sensitive values masked.

    - token, password, secret -> masked token
    - email -> masked email
    - question, text, sentence, title -> truncated
    """
    sanitized = {}

    for key, value in kwargs.items():
        if value is None:
            continue

        lowered = key.lower()
        if any(k in lowered for k in _SECRET_KEYS):
            sanitized[key] = mask_token(str(value))
        elif "email" in lowered:
            sanitized[key] = mask_email(str(value))
        elif isinstance(value, str) and any(k in lowered for k in _TEXT_KEYS):
            sanitized[key] = truncate_text(value)
        elif isinstance(value, (str, int, float, bool)):
            sanitized[key] = value
        else:
            sanitized[key] = str(value)

    return sanitized
