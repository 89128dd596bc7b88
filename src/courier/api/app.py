"""Courier FastAPI application.

Usage:
    uvicorn courier.api.app:create_app --factory --host 0.0.0.0 --port 8000
"""

from courier.api.routes import router
from courier.domain import courier
from courier.utils.logging import configure_logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse


def create_app(service=None) -> FastAPI:
    """Build the app. ``service`` replaces the environment-wired NotificationService."""
    configure_logging()
    courier.init()

    app = FastAPI(
        title="Courier API",
        description="Multi-channel notification dispatch",
    )
    app.state.notification_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the courier domain context for each request."""
        with courier.domain_context():
            response = await call_next(request)
        return response

    app.include_router(router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": courier.name})

    return app
