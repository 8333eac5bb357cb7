"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of external service communications.
"""

from .alert_sinks import (
    CompositeAlertSink,
    LoggingAlertSink,
    WebhookAlertSink,
    build_alert_sink,
)
from .history_api_gateway import HistoryApiInputFetcher
from .remote_model_gateway import RemoteHTTPModel

__all__ = [
    "CompositeAlertSink",
    "HistoryApiInputFetcher",
    "LoggingAlertSink",
    "RemoteHTTPModel",
    "WebhookAlertSink",
    "build_alert_sink",
]
