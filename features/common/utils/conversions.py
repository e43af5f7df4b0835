from typing import Optional

KELVIN_OFFSET = 273.15
MS_TO_KMH = 3.6

# Environment Canada wind chill index is only defined below this air
# temperature (°C) and above this wind speed (km/h)
WIND_CHILL_MAX_TEMP_C = 10.0
WIND_CHILL_MIN_WIND_KMH = 4.8

class UnitConversions:
    """Centralized utility for unit conversions across the application."""

    @staticmethod
    def kelvin_to_celsius(kelvin: float) -> float:
        """Convert Kelvin to degrees Celsius (unrounded)."""
        return kelvin - KELVIN_OFFSET

    @staticmethod
    def ms_to_kmh(ms: Optional[float]) -> Optional[float]:
        """Convert meters per second to kilometers per hour."""
        if ms is None:
            return None
        return ms * MS_TO_KMH

    @staticmethod
    def wind_chill(temperature_c: float, wind_speed_ms: float) -> float:
        """Feels-like temperature in °C for air temperature and wind speed in m/s.

        Outside the index's validity range (warm or calm) the air temperature
        itself is returned.
        """
        wind_kmh = UnitConversions.ms_to_kmh(wind_speed_ms)
        if temperature_c > WIND_CHILL_MAX_TEMP_C or wind_kmh < WIND_CHILL_MIN_WIND_KMH:
            return temperature_c

        wind_factor = wind_kmh ** 0.16
        return (
            13.12
            + 0.6215 * temperature_c
            - 11.37 * wind_factor
            + 0.3965 * temperature_c * wind_factor
        )

    @staticmethod
    def format_one_decimal(value: float) -> str:
        """Render a value with exactly one decimal digit."""
        return f"{value:.1f}"
