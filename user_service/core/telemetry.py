import logging

from opentelemetry import trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from user_service.core.config import Settings

logger = logging.getLogger(__name__)


def init_tracer(settings: Settings) -> TracerProvider:
    resource = Resource.create({
        "service.name": settings.SERVICE_NAME,
        "deployment.environment": settings.ENVIRONMENT.value,
    })
    provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)

    if settings.JAEGER_ENDPOINT:
        exporter = OTLPSpanExporter(endpoint=settings.JAEGER_ENDPOINT, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("Exporting spans to %s", settings.JAEGER_ENDPOINT)
    else:
        logger.warning("JAEGER_ENDPOINT is not set, spans are not exported")

    trace.set_tracer_provider(provider)
    set_global_textmap(CompositePropagator([
        TraceContextTextMapPropagator(),
        W3CBaggagePropagator(),
    ]))
    return provider


def shutdown_tracer(provider: TracerProvider | None) -> None:
    if provider is None:
        return
    provider.shutdown()
