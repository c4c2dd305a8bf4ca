"""
Domain exceptions for the prediction system.
"""

from typing import Optional


class PredictionException(Exception):
    """Base exception for prediction-related errors."""
    pass


class ConfigurationException(PredictionException):
    """Exception raised when model settings are invalid. Only raised at construction time."""
    pass


class StatsProviderException(PredictionException):
    """Exception raised when the statistics provider cannot serve a request."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
