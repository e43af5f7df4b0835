from fastapi import FastAPI
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from core.cache import MemoryResponseCache, ResponseCacheStore
from core.config import Settings, get_settings
from core.logging_config import setup_logging

# Feature routes
from features.temperature.routes.temperature_routes import router as temperature_router

# Services and clients
from features.temperature.services.dmi_edr_client import DMIEDRClient
from features.temperature.services.coldness_service import ColdnessService

setup_logging()
logger = logging.getLogger(__name__)

def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[ResponseCacheStore] = None
) -> FastAPI:
    """Build the application with its settings and cache store injected."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        try:
            logger.info("🚀 Starting Er Det Koldt API...")
            if not settings.dmi_api_key:
                logger.warning("⚠️ No DMI API key configured, upstream calls will be rejected")

            dmi_client = DMIEDRClient(settings)

            app.state.settings = settings
            app.state.dmi_client = dmi_client
            app.state.response_cache = cache or MemoryResponseCache()
            app.state.coldness_service = ColdnessService(
                client=dmi_client,
                settings=settings
            )

            mode = "wind chill" if settings.wind_chill_enabled else "air temperature"
            logger.info(f"✨ API startup complete ({mode} verdict, cache TTL {settings.cache_ttl}s)")
            yield

        except Exception as e:
            logger.error(f"❌ Startup error: {str(e)}")
            raise
        finally:
            logger.info("🔄 Shutting down API...")
            if hasattr(app.state, "dmi_client"):
                await app.state.dmi_client.close()
            if hasattr(app.state, "response_cache"):
                await app.state.response_cache.close()
            logger.info("👋 API shutdown complete")

    app = FastAPI(
        title="Er Det Koldt API",
        description="Is it cold in Copenhagen right now?",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    app.include_router(temperature_router)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 8787))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
        workers=1
    )
