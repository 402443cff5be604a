"""
Notification service entry point for Vibe Kanban.

Configures logging, builds the notification service from settings and
exposes notify, task-link, health and metrics endpoints.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

import structlog
import uvicorn
from fastapi import FastAPI, Request, status
from prometheus_client import make_asgi_app
from pydantic import BaseModel, Field

from vk_common.config import ConfigStore, Settings, get_settings
from vk_common.logging import configure_logging

from .background import drain
from .health import router as health_router
from .service import NotificationService

logger = structlog.get_logger()

# Seconds to wait for in-flight deliveries on shutdown.
_SHUTDOWN_DRAIN_S = 5.0


class NotifyRequest(BaseModel):
    title: str = Field(..., description="Notification title.")
    message: str = Field(default="", description="Notification body.")


class NotifyResponse(BaseModel):
    status: str


class TaskUrlResponse(BaseModel):
    url: str | None


def create_app(
    settings: Settings | None = None,
    service: NotificationService | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        settings: Settings to use (defaults to :func:`get_settings`).
        service: Pre-built service (tests); built from *settings* if omitted.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Startup / shutdown lifecycle for the notification service."""
        configure_logging(settings.log_level, json_output=settings.log_json)
        app.state.notification_service = service or NotificationService(
            ConfigStore(settings.notification_config()),
            settings=settings,
        )
        logger.info("notification_service_starting")
        yield
        await drain(timeout=_SHUTDOWN_DRAIN_S)
        logger.info("notification_service_stopping")

    app = FastAPI(title="Vibe Kanban Notification Service", lifespan=lifespan)
    app.include_router(health_router)
    app.mount("/metrics", make_asgi_app())

    @app.post("/notify", response_model=NotifyResponse, status_code=status.HTTP_202_ACCEPTED)
    async def notify(body: NotifyRequest, request: Request) -> NotifyResponse:
        await request.app.state.notification_service.notify(body.title, body.message)
        return NotifyResponse(status="accepted")

    @app.get("/projects/{project_id}/tasks/{task_id}/url", response_model=TaskUrlResponse)
    async def task_url(project_id: UUID, task_id: UUID, request: Request) -> TaskUrlResponse:
        url = await request.app.state.notification_service.kanban_task_url(project_id, task_id)
        return TaskUrlResponse(url=url)

    return app


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        create_app(_settings),
        host=_settings.service_host,
        port=_settings.service_port,
        reload=False,
    )
