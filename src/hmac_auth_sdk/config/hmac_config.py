"""
Configuration management for HMAC Auth Python SDK

Loads JSON configuration with per-environment signing and logging settings
and turns it into preconfigured request builders.
"""

import codecs
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import UnsupportedAlgorithmError
from ..signing.digest import canonical_algorithm_name
from ..signing.request_builder import SignatureRequestBuilder
from ..signing.types import (
    BuilderMode,
    DEFAULT_ALGORITHM,
    DEFAULT_CHARSET,
    normalize_delimiter,
)


CONFIG_ENV_VAR = "HMAC_AUTH_CONFIG"
DEFAULT_CONFIG_FILENAME = "config/hmac-auth-config.json"
DEFAULT_ENVIRONMENT = "default"
OUTPUT_FORMATS = ("hex", "base64")
LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Configuration loading and validation error"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


@dataclass
class SigningSettings:
    """Signing configuration"""
    algorithm: str = DEFAULT_ALGORITHM
    charset: str = DEFAULT_CHARSET
    delimiter: str = "\n"
    mode: str = BuilderMode.FULL.value
    output_format: str = "base64"

    @property
    def builder_mode(self) -> BuilderMode:
        return BuilderMode.parse(self.mode)

    @property
    def delimiter_byte(self) -> bytes:
        return normalize_delimiter(self.delimiter)


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level.upper())


@dataclass
class EnvironmentConfig:
    """Environment-specific configuration"""
    signing: SigningSettings = field(default_factory=SigningSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass
class DefaultConfig:
    """Default configuration values"""
    environment: str = DEFAULT_ENVIRONMENT


@dataclass
class HmacAuthConfig:
    """Configuration structure"""
    config_format_version: str
    environments: Dict[str, EnvironmentConfig]
    defaults: DefaultConfig


def builtin_config() -> HmacAuthConfig:
    """Configuration used when no configuration file is found."""
    return HmacAuthConfig(
        config_format_version="1.0",
        environments={DEFAULT_ENVIRONMENT: EnvironmentConfig()},
        defaults=DefaultConfig(),
    )


class HmacConfigManager:
    """Configuration manager for HMAC Auth Python SDK"""

    def __init__(self, config: HmacAuthConfig, environment: Optional[str] = None):
        self.config = config
        self.current_environment = environment or config.defaults.environment
        self._validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], environment: Optional[str] = None) -> 'HmacConfigManager':
        """Load configuration from a parsed dictionary"""
        try:
            config = cls._parse_config_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT")
        return cls(config, environment)

    @classmethod
    def from_json(cls, json_string: str, environment: Optional[str] = None) -> 'HmacConfigManager':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        return cls.from_dict(data, environment)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], environment: Optional[str] = None) -> 'HmacConfigManager':
        """Load configuration from file"""
        try:
            path = Path(file_path)
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string, environment)

    @classmethod
    def load_default(cls, environment: Optional[str] = None) -> 'HmacConfigManager':
        """
        Load default configuration.

        Uses the file named by ``HMAC_AUTH_CONFIG`` if set, then the first
        ``config/hmac-auth-config.json`` found in the working directory or
        its parents, and falls back to built-in defaults.
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            if not Path(env_path).exists():
                raise ConfigError(f"Configuration file not found: {env_path}", "FILE_NOT_FOUND")
            return cls.from_file(env_path, environment)

        default_paths = [
            Path(DEFAULT_CONFIG_FILENAME),
            Path("..") / DEFAULT_CONFIG_FILENAME,
            Path("../..") / DEFAULT_CONFIG_FILENAME,
        ]

        for path in default_paths:
            if path.exists():
                return cls.from_file(path, environment)

        return cls(builtin_config(), environment)

    def set_environment(self, environment: str) -> None:
        """Set current environment"""
        if environment not in self.config.environments:
            raise ConfigError(f"Environment '{environment}' not found", "ENVIRONMENT_NOT_FOUND")
        self.current_environment = environment

    def get_current_environment_config(self) -> EnvironmentConfig:
        """Get current environment configuration"""
        env_config = self.config.environments.get(self.current_environment)
        if not env_config:
            raise ConfigError(f"Environment '{self.current_environment}' not found", "ENVIRONMENT_NOT_FOUND")
        return env_config

    def get_signing_config(self) -> SigningSettings:
        """Get signing configuration for current environment"""
        return self.get_current_environment_config().signing

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration for current environment"""
        return self.get_current_environment_config().logging

    def list_environments(self) -> List[str]:
        """List available environments"""
        return list(self.config.environments.keys())

    def get_current_environment(self) -> str:
        """Get current environment name"""
        return self.current_environment

    def to_request_builder(self) -> SignatureRequestBuilder:
        """
        Create a request builder with the configured algorithm, charset and delimiter.

        Returns:
            SignatureRequestBuilder: Builder ready for the request fields
        """
        signing = self.get_signing_config()
        return (SignatureRequestBuilder()
                .algorithm(signing.algorithm)
                .charset(signing.charset)
                .delimiter(signing.delimiter_byte))

    def _validate(self) -> None:
        """Validate the configuration"""
        if self.config.defaults.environment not in self.config.environments:
            raise ConfigError(
                f"Default environment '{self.config.defaults.environment}' not found",
                "INVALID_DEFAULT_ENVIRONMENT"
            )

        if self.current_environment not in self.config.environments:
            raise ConfigError(
                f"Environment '{self.current_environment}' not found",
                "ENVIRONMENT_NOT_FOUND"
            )

        for env_name, env_config in self.config.environments.items():
            self._validate_signing(env_name, env_config.signing)

            level = env_config.logging.level
            if not isinstance(level, str) or level.upper() not in LOGGING_LEVELS:
                raise ConfigError(
                    f"Environment '{env_name}' has invalid logging level '{env_config.logging.level}'",
                    "INVALID_LOGGING_CONFIG"
                )

    @staticmethod
    def _validate_signing(env_name: str, signing: SigningSettings) -> None:
        try:
            signing.algorithm = canonical_algorithm_name(signing.algorithm)
        except UnsupportedAlgorithmError:
            raise ConfigError(
                f"Environment '{env_name}' references unsupported algorithm '{signing.algorithm}'",
                "INVALID_SIGNING_CONFIG"
            )

        try:
            codecs.lookup(signing.charset)
        except (LookupError, TypeError):
            raise ConfigError(
                f"Environment '{env_name}' references unknown charset '{signing.charset}'",
                "INVALID_SIGNING_CONFIG"
            )

        try:
            signing.delimiter_byte
            signing.builder_mode
        except ValueError as e:
            raise ConfigError(f"Environment '{env_name}' has invalid signing settings: {e}",
                              "INVALID_SIGNING_CONFIG")

        if signing.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Environment '{env_name}' has invalid output format '{signing.output_format}'",
                "INVALID_SIGNING_CONFIG"
            )

    @staticmethod
    def _parse_config_dict(data: Dict[str, Any]) -> HmacAuthConfig:
        """Parse configuration dictionary into structured objects"""
        environments = {}
        for env_name, env_data in data['environments'].items():
            environments[env_name] = EnvironmentConfig(
                signing=SigningSettings(**env_data.get('signing', {})),
                logging=LoggingConfig(**env_data.get('logging', {})),
            )

        defaults = DefaultConfig(**data.get('defaults', {}))

        return HmacAuthConfig(
            config_format_version=data.get('config_format_version', '1.0'),
            environments=environments,
            defaults=defaults,
        )


def load_config_from_json(json_string: str, environment: Optional[str] = None) -> HmacConfigManager:
    """Load configuration from JSON string"""
    return HmacConfigManager.from_json(json_string, environment)


def load_config_from_file(file_path: Union[str, Path], environment: Optional[str] = None) -> HmacConfigManager:
    """Load configuration from file"""
    return HmacConfigManager.from_file(file_path, environment)


def load_default_config(environment: Optional[str] = None) -> HmacConfigManager:
    """Load default configuration"""
    return HmacConfigManager.load_default(environment)


def configure_logging(logging_config: LoggingConfig, verbose: bool = False) -> None:
    """
    Configure the root logger from a logging configuration.

    Args:
        logging_config: Logging configuration
        verbose: Force DEBUG level
    """
    level = logging.DEBUG if verbose else logging_config.level_number
    logging.basicConfig(level=level, format=logging_config.format)
