import logging
from datetime import datetime, timezone
from typing import Optional

from core.config import Settings
from features.common.exceptions.forecast_exceptions import ParseError
from features.common.utils.conversions import UnitConversions
from features.temperature.models.temperature_types import ColdnessVerdict, ForecastResponse
from features.temperature.services.dmi_edr_client import DMIEDRClient

logger = logging.getLogger(__name__)

def iso_now() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

class ColdnessService:
    """Turns a DMI point forecast into a cold/not-cold verdict."""

    def __init__(self, client: DMIEDRClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def get_verdict(self, now: Optional[datetime] = None) -> ColdnessVerdict:
        query = self.client.build_query(now)
        forecast = await self.client.fetch(query)
        return self.convert(forecast)

    def convert(self, forecast: ForecastResponse) -> ColdnessVerdict:
        kelvin = forecast.first_value(self.settings.temperature_parameter)
        if kelvin is None:
            raise ParseError(
                f"Missing ranges['{self.settings.temperature_parameter}'] values in DMI payload"
            )
        temperature = UnitConversions.kelvin_to_celsius(kelvin)

        if not self.settings.wind_chill_enabled:
            return ColdnessVerdict(
                temperature=UnitConversions.format_one_decimal(temperature),
                is_koldt=temperature <= self.settings.cold_threshold_celsius,
                timestamp=iso_now(),
                updated=forecast.first_time
            )

        wind_speed = forecast.first_value(self.settings.wind_speed_parameter) or 0.0
        feels_like = UnitConversions.wind_chill(temperature, wind_speed)
        logger.debug(f"t={temperature:.2f}C wind={wind_speed:.2f}m/s feels_like={feels_like:.2f}C")

        return ColdnessVerdict(
            temperature=UnitConversions.format_one_decimal(temperature),
            feels_like=UnitConversions.format_one_decimal(feels_like),
            is_koldt=feels_like <= self.settings.feels_like_threshold_celsius,
            timestamp=forecast.first_time,
            wind_speed=UnitConversions.format_one_decimal(wind_speed)
        )
