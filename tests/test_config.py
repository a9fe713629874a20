"""
Tests for configuration loading and validation
"""

import json
import logging

import pytest

from hmac_auth_sdk.config import (
    CONFIG_ENV_VAR,
    ConfigError,
    HmacConfigManager,
    LoggingConfig,
    builtin_config,
    configure_logging,
    load_config_from_file,
    load_config_from_json,
    load_default_config,
)
from hmac_auth_sdk.signing import BuilderMode, HmacSigner


def make_config(**signing_overrides):
    signing = {
        "algorithm": "HmacSHA512",
        "charset": "UTF-8",
        "delimiter": "\n",
        "mode": "FULL",
        "output_format": "base64",
    }
    signing.update(signing_overrides)
    return {
        "config_format_version": "1.0",
        "defaults": {"environment": "production"},
        "environments": {
            "production": {"signing": signing, "logging": {"level": "INFO"}},
            "legacy": {
                "signing": {"algorithm": "hmacsha256", "mode": "only-header", "output_format": "hex"},
            },
        },
    }


class TestLoading:
    """Test configuration sources"""

    def test_from_json(self):
        """Test loading a JSON document"""
        manager = load_config_from_json(json.dumps(make_config()))
        assert manager.get_current_environment() == "production"
        assert manager.list_environments() == ["production", "legacy"]
        assert manager.get_logging_config().level == "INFO"

    def test_explicit_environment(self):
        """Test selecting a non-default environment"""
        manager = HmacConfigManager.from_dict(make_config(), "legacy")
        signing = manager.get_signing_config()
        assert signing.algorithm == "HmacSHA256"
        assert signing.builder_mode is BuilderMode.ONLY_HEADER
        assert signing.output_format == "hex"
        assert signing.charset == "UTF-8"

    def test_set_environment(self):
        """Test switching environments"""
        manager = HmacConfigManager.from_dict(make_config())
        manager.set_environment("legacy")
        assert manager.get_current_environment() == "legacy"
        with pytest.raises(ConfigError) as exc_info:
            manager.set_environment("staging")
        assert exc_info.value.code == "ENVIRONMENT_NOT_FOUND"

    def test_from_file(self, tmp_path):
        """Test loading from a file"""
        path = tmp_path / "config.json"
        path.write_text(json.dumps(make_config()), encoding="utf-8")
        assert load_config_from_file(path).get_signing_config().output_format == "base64"

    def test_missing_file(self, tmp_path):
        """Test a missing configuration file"""
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_file(tmp_path / "absent.json")
        assert exc_info.value.code == "FILE_ERROR"

    def test_invalid_json(self):
        """Test malformed JSON"""
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_json("{not json")
        assert exc_info.value.code == "PARSE_ERROR"

    @pytest.mark.parametrize("data", [
        {},
        {"environments": []},
        {"environments": {"default": {"signing": {"unknown_option": 1}}}},
    ])
    def test_invalid_format(self, data):
        """Test structurally invalid configuration"""
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_dict(data)
        assert exc_info.value.code == "INVALID_FORMAT"


class TestDefaultLoading:
    """Test default configuration discovery"""

    def test_builtin_defaults(self):
        """Test the built-in configuration when no file exists"""
        manager = load_default_config()
        signing = manager.get_signing_config()
        assert manager.get_current_environment() == "default"
        assert signing.algorithm == "HmacSHA512"
        assert signing.builder_mode is BuilderMode.FULL
        assert signing.delimiter_byte == b"\n"

    def test_env_var(self, tmp_path, monkeypatch):
        """Test the configuration path from the environment"""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps(make_config()), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert HmacConfigManager.load_default().get_current_environment() == "production"

    def test_env_var_missing_file(self, tmp_path, monkeypatch):
        """Test an environment path that does not exist"""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.json"))
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.load_default()
        assert exc_info.value.code == "FILE_NOT_FOUND"

    def test_working_directory_file(self, tmp_path):
        """Test discovery of config/hmac-auth-config.json"""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "hmac-auth-config.json").write_text(
            json.dumps(make_config()), encoding="utf-8")
        assert HmacConfigManager.load_default("legacy").get_signing_config().algorithm == "HmacSHA256"


class TestValidation:
    """Test configuration validation"""

    def test_algorithm_canonicalized(self):
        """Test that algorithm names are normalized"""
        manager = HmacConfigManager.from_dict(make_config(algorithm="HMACSHA384"))
        assert manager.get_signing_config().algorithm == "HmacSHA384"

    @pytest.mark.parametrize("overrides", [
        {"algorithm": "HmacFOO"},
        {"charset": "NO-SUCH-CHARSET"},
        {"delimiter": "ab"},
        {"mode": "PARTIAL"},
        {"output_format": "raw"},
    ])
    def test_invalid_signing_settings(self, overrides):
        """Test rejection of invalid signing settings"""
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_dict(make_config(**overrides))
        assert exc_info.value.code == "INVALID_SIGNING_CONFIG"

    def test_invalid_logging_level(self):
        """Test rejection of an unknown logging level"""
        data = make_config()
        data["environments"]["production"]["logging"]["level"] = "LOUD"
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_dict(data)
        assert exc_info.value.code == "INVALID_LOGGING_CONFIG"

    def test_invalid_default_environment(self):
        """Test a default environment that is not defined"""
        data = make_config()
        data["defaults"]["environment"] = "staging"
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_dict(data)
        assert exc_info.value.code == "INVALID_DEFAULT_ENVIRONMENT"

    def test_unknown_requested_environment(self):
        """Test requesting an environment that is not defined"""
        with pytest.raises(ConfigError) as exc_info:
            HmacConfigManager.from_dict(make_config(), "staging")
        assert exc_info.value.code == "ENVIRONMENT_NOT_FOUND"


class TestRequestBuilder:
    """Test configured request builders"""

    def test_builder_carries_settings(self, api_secret):
        """Test that configured settings reach the request"""
        manager = HmacConfigManager.from_dict(make_config(delimiter="|", charset="ISO-8859-1"))
        request = manager.to_request_builder().api_key("k1").api_secret(api_secret).build()
        assert request.delimiter == b"|"
        assert request.charset == "ISO-8859-1"
        assert request.algorithm == "HmacSHA512"

    def test_builder_signs(self, get_request):
        """Test signing with a configured builder"""
        manager = HmacConfigManager(builtin_config())
        request = (manager.to_request_builder()
                   .credentials(get_request.api_key, get_request.api_secret)
                   .scheme(get_request.scheme)
                   .host(get_request.host)
                   .method(get_request.method)
                   .resource(get_request.resource)
                   .nonce(get_request.nonce)
                   .date(get_request.date)
                   .content_type(get_request.content_type)
                   .build())
        assert HmacSigner(request).build() == HmacSigner(get_request).build()


class TestConfigureLogging:
    """Test logging setup from configuration"""

    def test_level_number(self):
        """Test level name resolution"""
        assert LoggingConfig(level="debug").level_number == logging.DEBUG

    def test_configure_logging(self, monkeypatch):
        """Test that basicConfig receives the configured level"""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(LoggingConfig(level="ERROR"))
        configure_logging(LoggingConfig(level="ERROR"), verbose=True)

        assert calls[0]["level"] == logging.ERROR
        assert calls[1]["level"] == logging.DEBUG
