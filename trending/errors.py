from typing import Optional


class TrendingError(Exception):
    """Base class for failures surfaced by the trending feed."""


class ConfigurationError(TrendingError):
    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class InvalidArgument(TrendingError, ValueError):
    pass
