import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import aiohttp
from pydantic import ValidationError

from core.config import Settings
from features.common.exceptions.forecast_exceptions import (
    ParseError,
    TransportError,
    UpstreamError
)
from features.temperature.models.temperature_types import ForecastQuery, ForecastResponse

logger = logging.getLogger(__name__)

class DMIEDRClient:
    """Client for the DMI forecast EDR position endpoint."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.upstream_timeout)
            )
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    def build_query(self, now: Optional[datetime] = None) -> ForecastQuery:
        """Build the point query, windowed to the next hour when enabled."""
        if not self.settings.include_time_window:
            return ForecastQuery(
                coords=self.settings.point,
                crs=self.settings.crs,
                parameter_names=self.settings.parameter_names
            )

        return ForecastQuery.for_window(
            now or datetime.now(timezone.utc),
            coords=self.settings.point,
            parameter_names=self.settings.parameter_names,
            crs=self.settings.crs,
            window_seconds=self.settings.query_window_seconds
        )

    async def fetch(self, query: ForecastQuery) -> ForecastResponse:
        """Run a single GET against the position endpoint."""
        session = await self._init_session()
        headers = {
            "Accept": "application/json",
            "X-Gravitee-Api-Key": self.settings.dmi_api_key
        }

        logger.info(f"Fetching {','.join(query.parameter_names)} for {query.coords}")
        try:
            async with session.get(
                self.settings.position_url,
                params=query.to_params(),
                headers=headers
            ) as response:
                if not 200 <= response.status < 300:
                    logger.error(f"DMI API returned status {response.status}")
                    raise UpstreamError(response.status)

                # DMI serves application/prs.coverage+json
                data = await response.json(content_type=None)

        except aiohttp.ClientError as e:
            raise TransportError(f"Error reaching DMI API: {str(e)}") from e
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"DMI API did not answer within {self.settings.upstream_timeout}s"
            ) from e
        except ValueError as e:
            raise ParseError(f"Invalid JSON from DMI API: {str(e)}") from e

        return self.parse(data)

    def parse(self, data: object) -> ForecastResponse:
        try:
            return ForecastResponse.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"Unexpected DMI payload: {str(e)}") from e
