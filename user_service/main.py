import asyncio
import logging
import signal

import grpc

from user_service.core.config import get_settings
from user_service.core.logging_config import setup_logging
from user_service.core.telemetry import init_tracer, shutdown_tracer
from user_service.db.database import create_engine, create_session_factory
from user_service.db.store import UserStore
from user_service.protos import user_service_pb2_grpc
from user_service.services.user_service import UserServicer

logger = logging.getLogger(__name__)


def create_server(store: UserStore) -> grpc.aio.Server:
    server = grpc.aio.server()
    user_service_pb2_grpc.add_UserServiceServicer_to_server(UserServicer(store), server)
    return server


async def serve() -> None:
    settings = get_settings()
    setup_logging(
        level=settings.LOG_LEVEL,
        log_path=settings.LOG_PATH,
        max_bytes=settings.LOG_MAX_BYTES,
        backup_count=settings.LOG_BACKUP_COUNT,
    )
    tracer_provider = init_tracer(settings)

    engine = create_engine(settings)
    server = None
    try:
        server = create_server(UserStore(create_session_factory(engine)))
        server.add_insecure_port(f"[::]:{settings.PORT}")

        # SIGINT / SIGTERM -> плавная остановка
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_event.set)

        await server.start()
        logger.info("%s started on port %s (%s)", settings.SERVICE_NAME, settings.PORT, settings.ENVIRONMENT.value)
        await stop_event.wait()
    finally:
        logger.info("Shutting down, grace period %ss", settings.SHUTDOWN_GRACE_SECONDS)
        if server is not None:
            await server.stop(settings.SHUTDOWN_GRACE_SECONDS)
        await engine.dispose()
        shutdown_tracer(tracer_provider)
        logger.info("Server stopped")


def run() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    run()
