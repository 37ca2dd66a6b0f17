"""
OpenTelemetry distributed tracing configuration.
"""

from fastapi import FastAPI
from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import settings

# Polled endpoints that would only add noise to traces
EXCLUDED_URLS = "health,metrics"


def configure_tracer() -> TracerProvider:
    """
    Build the tracer provider and install it globally.

    Spans go to the console in debug mode and to OTLP_ENDPOINT when set.
    """
    resource = Resource.create(
        {
            "service.name": settings.SERVICE_NAME,
            "service.version": settings.VERSION,
            "deployment.environment": settings.ENVIRONMENT,
        }
    )
    tracer_provider = TracerProvider(resource=resource, sampler=ParentBasedTraceIdRatio(0.1))

    if not settings.is_release:
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if settings.OTLP_ENDPOINT:
        tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT)))

    trace.set_tracer_provider(tracer_provider)
    return tracer_provider


def setup_tracing(app: FastAPI) -> None:
    """
    Instrument the FastAPI application.
    """
    if not settings.ENABLE_TRACING:
        return

    try:
        tracer_provider = configure_tracer()
        FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider, excluded_urls=EXCLUDED_URLS)
        logger.info("OpenTelemetry tracing configured")
    except Exception as e:
        logger.error(f"Failed to setup OpenTelemetry tracing: {e}")


def instrument_engine(engine: AsyncEngine) -> None:
    """
    Trace queries issued through ``engine``.
    """
    if not settings.ENABLE_TRACING:
        return

    try:
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine, tracer_provider=trace.get_tracer_provider())
    except Exception as e:
        logger.error(f"Failed to instrument database engine: {e}")
