from .loader import MODULES_ENV, load_config, load_yaml_config, parse_config
from .models import AppConfig, LoggingConfig, ProviderSection

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "MODULES_ENV",
    "ProviderSection",
    "load_config",
    "load_yaml_config",
    "parse_config",
]
