import logging
from typing import Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response

from core.cache import CachedResponse, ResponseCacheStore
from core.config import Settings
from features.temperature.models.temperature_types import ColdnessVerdict, ErrorResponse
from features.temperature.services.coldness_service import ColdnessService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Temperature"])

def get_settings(request: Request) -> Settings:
    """Dependency to get the Settings instance."""
    return request.app.state.settings

def get_service(request: Request) -> ColdnessService:
    """Dependency to get the ColdnessService instance."""
    return request.app.state.coldness_service

def get_cache(request: Request) -> ResponseCacheStore:
    """Dependency to get the response cache."""
    return request.app.state.response_cache

def handle_preflight(method: str, settings: Settings) -> Optional[Response]:
    if method != "OPTIONS":
        return None
    return Response(status_code=204, headers=settings.get_cors_headers())

async def lookup_cache(
    cache: ResponseCacheStore,
    settings: Settings
) -> Optional[Response]:
    cached = await cache.get(settings.cache_key_url)
    if cached is None:
        logger.debug("Cache miss")
        return None

    logger.debug("Serving cached response")
    return Response(
        content=cached.body,
        status_code=cached.status_code,
        headers={**cached.headers, **settings.get_cors_headers()}
    )

def respond(
    verdict: ColdnessVerdict,
    settings: Settings,
    cache: ResponseCacheStore,
    background_tasks: BackgroundTasks
) -> Response:
    headers: Dict[str, str] = {
        "Content-Type": "application/json",
        "Cache-Control": f"public, max-age={settings.cache_ttl}",
    }
    entry = CachedResponse(body=verdict.to_json(), headers=headers)

    # Stored after the response has been sent
    background_tasks.add_task(cache.put, settings.cache_key_url, entry, settings.cache_ttl)

    return Response(
        content=entry.body,
        headers={**headers, **settings.get_cors_headers()}
    )

def handle_error(error: Exception, settings: Settings) -> Response:
    body = ErrorResponse(error=settings.error_message, detail=str(error))
    return Response(
        content=body.model_dump_json(),
        status_code=500,
        headers={"Content-Type": "application/json", **settings.get_cors_headers()}
    )

@router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "OPTIONS"],
    response_model=ColdnessVerdict,
    summary="Is it cold?",
    description="Returns the current temperature in Copenhagen and whether it counts as cold. Any path is accepted."
)
async def get_coldness(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    service: ColdnessService = Depends(get_service),
    cache: ResponseCacheStore = Depends(get_cache)
) -> Response:
    """Serve the coldness verdict, from cache when possible."""
    preflight = handle_preflight(request.method, settings)
    if preflight is not None:
        return preflight

    try:
        cached = await lookup_cache(cache, settings)
        if cached is not None:
            return cached

        verdict = await service.get_verdict()
        return respond(verdict, settings, cache, background_tasks)

    except Exception as e:
        logger.error(f"Error building temperature response: {str(e)}")
        return handle_error(e, settings)
