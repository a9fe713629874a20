"""
Configuration management for HMAC Auth Python SDK

This module provides JSON configuration with per-environment signing and
logging settings.
"""

from .hmac_config import (
    HmacAuthConfig,
    HmacConfigManager,
    EnvironmentConfig,
    SigningSettings,
    LoggingConfig,
    DefaultConfig,
    ConfigError,
    CONFIG_ENV_VAR,
    builtin_config,
    configure_logging,
    load_config_from_json,
    load_config_from_file,
    load_default_config,
)

__all__ = [
    'HmacAuthConfig',
    'HmacConfigManager',
    'EnvironmentConfig',
    'SigningSettings',
    'LoggingConfig',
    'DefaultConfig',
    'ConfigError',
    'CONFIG_ENV_VAR',
    'builtin_config',
    'configure_logging',
    'load_config_from_json',
    'load_config_from_file',
    'load_default_config',
]
