from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List

class Settings(BaseSettings):
    """Application settings."""

    # DMI forecast EDR settings
    dmi_api_key: str = ""
    dmi_base_url: str = "https://dmigw.govcloud.dk/v1/forecastedr"
    dmi_collection: str = "harmonie_dini_sf"
    upstream_timeout: float = 10  # seconds, total per request

    # Location (WKT, longitude first)
    point: str = "POINT(12.561 55.715)"
    crs: str = "crs84"

    # Parameters requested from the collection
    temperature_parameter: str = "temperature-2m"
    wind_speed_parameter: str = "wind-speed"

    # Verdict policy
    wind_chill_enabled: bool = True
    cold_threshold_celsius: float = 0.0         # raw temperature, simple variant
    feels_like_threshold_celsius: float = 5.0   # wind chill, wind-aware variant

    # Query window
    include_time_window: bool = True
    query_window_seconds: int = 3600

    # Response cache
    cache_ttl: int = 300  # 5 minutes
    cache_key_url: str = "https://erdetkoldt.dk/api/temperature"

    # CORS
    cors_allow_origin: str = "https://erdetkoldt.dk"
    cors_allow_methods: List[str] = ["GET", "HEAD", "POST", "OPTIONS"]
    cors_max_age: int = 86400

    error_message: str = "Kunne ikke hente temperatur data"

    @property
    def position_url(self) -> str:
        """EDR position query endpoint for the configured collection."""
        return f"{self.dmi_base_url}/collections/{self.dmi_collection}/position"

    @property
    def parameter_names(self) -> List[str]:
        if self.wind_chill_enabled:
            return [self.temperature_parameter, self.wind_speed_parameter]
        return [self.temperature_parameter]

    def get_cors_headers(self) -> Dict[str, str]:
        """CORS headers attached to every response, preflight included."""
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Methods": ",".join(self.cors_allow_methods),
            "Access-Control-Max-Age": str(self.cors_max_age),
        }

    model_config = SettingsConfigDict(
        env_prefix="koldt_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

def get_settings() -> Settings:
    """Build settings from the environment."""
    return Settings()
