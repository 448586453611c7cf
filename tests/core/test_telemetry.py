"""
Тесты для инициализации трассировки.
"""

from opentelemetry.sdk.trace import TracerProvider

from user_service.core.config import Settings
from user_service.core.telemetry import init_tracer, shutdown_tracer


def test_init_tracer_sets_resource(mocker):
    set_provider = mocker.patch("user_service.core.telemetry.trace.set_tracer_provider")
    set_textmap = mocker.patch("user_service.core.telemetry.set_global_textmap")
    settings = Settings(
        _env_file=None,
        PORT=5051,
        DB_CONNECT="postgres://u:p@db/users",
        SERVICE_NAME="users",
        ENVIRONMENT="PROD",
    )

    provider = init_tracer(settings)

    assert isinstance(provider, TracerProvider)
    assert provider.resource.attributes["service.name"] == "users"
    assert provider.resource.attributes["deployment.environment"] == "PROD"
    set_provider.assert_called_once_with(provider)
    set_textmap.assert_called_once()
    provider.shutdown()


def test_init_tracer_with_endpoint_adds_exporter(mocker):
    mocker.patch("user_service.core.telemetry.trace.set_tracer_provider")
    mocker.patch("user_service.core.telemetry.set_global_textmap")
    exporter = mocker.patch("user_service.core.telemetry.OTLPSpanExporter")
    processor = mocker.patch("user_service.core.telemetry.BatchSpanProcessor")
    add_processor = mocker.patch.object(TracerProvider, "add_span_processor")
    settings = Settings(
        _env_file=None,
        PORT=5051,
        DB_CONNECT="postgres://u:p@db/users",
        JAEGER_ENDPOINT="jaeger:4317",
    )

    init_tracer(settings)

    exporter.assert_called_once_with(endpoint="jaeger:4317", insecure=True)
    processor.assert_called_once_with(exporter.return_value)
    add_processor.assert_called_once_with(processor.return_value)


def test_shutdown_tracer_without_provider():
    shutdown_tracer(None)


def test_shutdown_tracer_calls_provider(mocker):
    provider = mocker.Mock(spec=TracerProvider)
    shutdown_tracer(provider)
    provider.shutdown.assert_called_once()
