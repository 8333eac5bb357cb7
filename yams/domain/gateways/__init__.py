"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .alert_sink import IAlertSink
from .input_fetcher import IInputFetcher

__all__ = ["IAlertSink", "IInputFetcher"]
