"""Configuration models and loaders."""

from .config import Config, FetcherConfig, MonitoringConfig, WebConfig, find_config_file, load_config

__all__ = [
    "Config",
    "FetcherConfig",
    "MonitoringConfig",
    "WebConfig",
    "find_config_file",
    "load_config",
]
