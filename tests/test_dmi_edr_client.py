"""
Unit tests for DMIEDRClient.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from core.config import Settings
from features.common.exceptions.forecast_exceptions import (
    ParseError,
    TransportError,
    UpstreamError
)
from features.temperature.services.dmi_edr_client import DMIEDRClient
from edr_payloads import make_payload


def mock_session(status=200, payload=None, json_error=None, get_error=None):
    """Session whose get() yields a single canned response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload, side_effect=json_error)

    session = MagicMock()
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value.__aenter__.return_value = response
        session.get.return_value.__aexit__.return_value = False
    return session


class TestBuildQuery:

    @pytest.fixture
    def client(self, settings):
        return DMIEDRClient(settings)

    def test_window_spans_one_hour(self, client):
        now = datetime(2024, 1, 1, 12, 0, 0, 987654, tzinfo=timezone.utc)
        query = client.build_query(now)

        assert query.start == "2024-01-01T12:00:00.000Z"
        assert query.end == "2024-01-01T13:00:00.000Z"

    def test_window_bounds_are_3600_seconds_apart(self, client):
        query = client.build_query(datetime(2024, 12, 31, 23, 30, 15, 500, tzinfo=timezone.utc))
        fmt = "%Y-%m-%dT%H:%M:%S.000Z"
        start = datetime.strptime(query.start, fmt)
        end = datetime.strptime(query.end, fmt)

        assert end - start == timedelta(seconds=3600)
        assert query.end == "2025-01-01T00:30:15.000Z"

    def test_non_utc_now_is_converted(self, client):
        cet = timezone(timedelta(hours=1))
        query = client.build_query(datetime(2024, 1, 1, 13, 0, 0, tzinfo=cet))
        assert query.start == "2024-01-01T12:00:00.000Z"

    def test_default_now(self, client):
        query = client.build_query()
        assert query.start.endswith(".000Z")
        assert query.end.endswith(".000Z")

    def test_params(self, client):
        now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        params = client.build_query(now).to_params()

        assert params == {
            "coords": "POINT(12.561 55.715)",
            "crs": "crs84",
            "parameter-name": "temperature-2m,wind-speed",
            "datetime": "2024-01-01T12:00:00.000Z/2024-01-01T13:00:00.000Z",
        }

    def test_params_without_wind_or_window(self):
        settings = Settings(_env_file=None, wind_chill_enabled=False, include_time_window=False)
        params = DMIEDRClient(settings).build_query().to_params()

        assert params["parameter-name"] == "temperature-2m"
        assert "datetime" not in params


class TestFetch:

    @pytest.fixture
    def client(self, settings):
        return DMIEDRClient(settings)

    @pytest.mark.asyncio
    async def test_fetch_success(self, client):
        client._session = mock_session(payload=make_payload())
        query = client.build_query()

        forecast = await client.fetch(query)

        assert forecast.first_value("temperature-2m") == 276.15
        assert forecast.first_value("wind-speed") == 5.0
        assert forecast.first_time == "2024-01-01T12:00:00Z"

        args, kwargs = client._session.get.call_args
        assert args[0] == (
            "https://dmigw.govcloud.dk/v1/forecastedr/collections/harmonie_dini_sf/position"
        )
        assert kwargs["params"] == query.to_params()
        assert kwargs["headers"] == {
            "Accept": "application/json",
            "X-Gravitee-Api-Key": "test-key"
        }

    @pytest.mark.asyncio
    async def test_non_success_status(self, client):
        client._session = mock_session(status=503)

        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch(client.build_query())

        assert exc_info.value.status == 503
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_redirect_status_is_an_error(self, client):
        client._session = mock_session(status=304)

        with pytest.raises(UpstreamError):
            await client.fetch(client.build_query())

    @pytest.mark.asyncio
    async def test_connection_error(self, client):
        client._session = mock_session(get_error=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(TransportError):
            await client.fetch(client.build_query())

    @pytest.mark.asyncio
    async def test_timeout(self, client):
        client._session = mock_session(get_error=asyncio.TimeoutError())

        with pytest.raises(TransportError, match="did not answer"):
            await client.fetch(client.build_query())

    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        client._session = mock_session(json_error=ValueError("Expecting value"))

        with pytest.raises(ParseError):
            await client.fetch(client.build_query())

    @pytest.mark.asyncio
    async def test_missing_domain(self, client):
        client._session = mock_session(payload={"ranges": {}})

        with pytest.raises(ParseError):
            await client.fetch(client.build_query())

    @pytest.mark.asyncio
    async def test_close(self, client):
        session = mock_session()
        session.close = AsyncMock()
        client._session = session

        await client.close()

        session.close.assert_awaited_once()
        assert client._session is None
