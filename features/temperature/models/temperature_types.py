from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

def format_edr_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with sub-second precision zeroed."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + ".000Z"

class ForecastQuery(BaseModel):
    """Point query against the EDR position endpoint."""
    coords: str = Field(..., description="WKT point, longitude first")
    crs: str = "crs84"
    parameter_names: List[str]
    start: Optional[str] = None
    end: Optional[str] = None

    @classmethod
    def for_window(
        cls,
        now: datetime,
        coords: str,
        parameter_names: List[str],
        crs: str = "crs84",
        window_seconds: int = 3600
    ) -> "ForecastQuery":
        """Query covering [now, now + window]."""
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        now = now.replace(microsecond=0)
        return cls(
            coords=coords,
            crs=crs,
            parameter_names=parameter_names,
            start=format_edr_timestamp(now),
            end=format_edr_timestamp(now + timedelta(seconds=window_seconds))
        )

    def to_params(self) -> Dict[str, str]:
        params = {
            "coords": self.coords,
            "crs": self.crs,
            "parameter-name": ",".join(self.parameter_names),
        }
        if self.start and self.end:
            params["datetime"] = f"{self.start}/{self.end}"
        return params

class EdrRange(BaseModel):
    values: List[Optional[float]] = []

class EdrAxis(BaseModel):
    values: List[str] = []

class EdrAxes(BaseModel):
    t: EdrAxis

class EdrDomain(BaseModel):
    axes: EdrAxes

class ForecastResponse(BaseModel):
    """The subset of the EDR coverage payload the gateway reads."""
    model_config = ConfigDict(extra="ignore")

    ranges: Dict[str, EdrRange]
    domain: EdrDomain

    def first_value(self, parameter: str) -> Optional[float]:
        """Nearest value for a parameter, None when absent."""
        param_range = self.ranges.get(parameter)
        if not param_range or not param_range.values:
            return None
        return param_range.values[0]

    @property
    def first_time(self) -> Optional[str]:
        times = self.domain.axes.t.values
        return times[0] if times else None

class ColdnessVerdict(BaseModel):
    """Outbound answer to "is it cold?"."""
    model_config = ConfigDict(populate_by_name=True)

    temperature: str
    feels_like: Optional[str] = Field(None, alias="feelsLike")
    is_koldt: bool = Field(..., alias="isKoldt")
    timestamp: Optional[str] = None
    wind_speed: Optional[str] = Field(None, alias="windSpeed")
    updated: Optional[str] = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

class ErrorResponse(BaseModel):
    error: str
    detail: str
