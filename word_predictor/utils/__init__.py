from .config_manager import Config, ConfigError, DEFAULTS
from .logger_utils import Log, configure_logging
from .metrics_tracker import Metrics

__all__ = ["Config", "ConfigError", "DEFAULTS", "Log", "configure_logging", "Metrics"]
