from enum import Enum

# 15 minutes between scheduler ticks
DEFAULT_TICK_INTERVAL_SECONDS = 900
# 6 hours of history for both model input and query windows
DEFAULT_LOOKBACK_SECONDS = 21600
DEFAULT_QUERY_WINDOW_SECONDS = 21600

TICK_LOCK_NAME = "yams:tick-lock"
# Tick lock TTL is the interval plus this grace period
TICK_LOCK_GRACE_SECONDS = 60


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
