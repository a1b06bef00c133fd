"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Wiring of infrastructure only
(Firebase REST clients, weekly cleanup scheduler, telemetry); no business logic.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from smartcampus.core.config import get_settings
from smartcampus.core.scheduler import WeeklyScheduler
from smartcampus.infrastructure.firebase.client import close_firebase, init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Firebase clients, cleanup scheduler (if enabled and
    Firebase is up), telemetry (if enabled). Shutdown runs in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    firebase_ready = init_firebase()
    app.state.firebase_ready = firebase_ready

    app.state.cleanup_scheduler = None
    if settings.cleanup_schedule_enabled:
        if firebase_ready:
            from smartcampus.api.v1.dependencies import run_cleanup_rejected

            scheduler = WeeklyScheduler(
                run_cleanup_rejected,
                weekday=settings.cleanup_weekday,
                hour=settings.cleanup_hour,
                minute=settings.cleanup_minute,
                timezone=settings.cleanup_timezone,
            )
            scheduler.start()
            app.state.cleanup_scheduler = scheduler
            logger.info("Weekly cleanup scheduled; next run at %s", scheduler.next_run().isoformat())
        else:
            logger.warning("Cleanup schedule enabled but Firebase is not configured; not scheduling")

    if settings.telemetry_enabled:
        from smartcampus.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    if app.state.cleanup_scheduler is not None:
        await app.state.cleanup_scheduler.stop()
        app.state.cleanup_scheduler = None
        logger.info("Cleanup scheduler stopped")

    from smartcampus.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    await close_firebase()
