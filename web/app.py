"""
FastAPI application for the Keylight intake form.

Production deployment configuration via environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from core.intake import IntakeFormController, SubmissionClient, ValidationService
from utils.config import Config, configure_logging
from web.intake_routes import router as intake_router
from web.sessions import IntakeSessionRegistry

logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

# Production mode detection
IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

STATIC_DIR = Path(__file__).parent / "static"


def create_app(
    config: Optional[Config] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings; loaded from the environment when omitted
        transport: httpx transport for backend calls (tests pass a MockTransport)
    """
    config = config or Config.load()
    configure_logging(config)

    app = FastAPI(
        title="Keylight Intake",
        description="Multi-step project intake form for homebuyers and developers",
        version="0.1.0",
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )

    validator = ValidationService()

    def new_client() -> SubmissionClient:
        return SubmissionClient(base_url=config.api_base_url, transport=transport)

    def new_controller() -> IntakeFormController:
        return IntakeFormController(validator=validator, client=new_client())

    app.state.config = config
    app.state.sessions = IntakeSessionRegistry(new_controller, max_sessions=config.max_sessions)

    @app.get("/health", include_in_schema=False)
    def health():
        """Liveness probe. No dependencies, no IO."""
        return {"status": "healthy"}

    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/intake/", status_code=307)

    @app.get("/api/backend-health")
    async def backend_health():
        """Report whether the intake backend answers its health check."""
        result = await new_client().check_health()
        return {
            "success": result.success,
            "data": result.data,
            "error": result.error,
            "backend": config.api_base_url,
        }

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(intake_router)

    logger.info("Keylight intake form ready; backend at %s", config.api_base_url)
    return app


# Create app instance for uvicorn
app = create_app()
