class ForecastError(Exception):
    """Base exception for forecast retrieval errors."""
    pass

class UpstreamError(ForecastError):
    """Raised when the forecast API answers with a non-success status."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"DMI API responded with {status}")

class ParseError(ForecastError):
    """Raised when the forecast payload lacks the expected fields."""
    pass

class TransportError(ForecastError):
    """Raised when the forecast API cannot be reached."""
    pass
