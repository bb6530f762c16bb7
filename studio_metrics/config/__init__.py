"""
Configuration module for the metrics engine.
"""
from .settings import (
    MetricsSettings,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'MetricsSettings',
    'get_config',
    'load_config',
    'reload_config'
]
