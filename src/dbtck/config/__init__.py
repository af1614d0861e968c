"""Configuration management for dbtck."""

from dbtck.config.models import LoggingSettings, PoolConfig
from dbtck.config.properties import load_properties, parse_properties
from dbtck.config.resolver import (
    CONFIG_FILE_NAME,
    CONFIG_SUBDIR,
    Property,
    Settings,
    get_settings,
    reset_settings,
    resolve_settings,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CONFIG_SUBDIR",
    "LoggingSettings",
    "PoolConfig",
    "Property",
    "Settings",
    "get_settings",
    "load_properties",
    "parse_properties",
    "reset_settings",
    "resolve_settings",
]
