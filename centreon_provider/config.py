"""Configuration management for the Centreon provider."""

import os
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
import logging

import tomli
import yaml


TRUE_STRINGS = ('true', '1', 'yes', 'on')


class ProviderConfig(BaseModel):
    """Connection settings for the Centreon API, immutable once built."""

    model_config = ConfigDict(frozen=True)

    protocol: str = Field(..., description="Protocol to use for API calls (http or https)")
    server: str = Field(..., description="Centreon server hostname")
    port: str = Field(..., description="Centreon server port")
    api_version: str = Field(default="latest", description="API version to use (e.g. 'latest')")
    api_key: str = Field(..., description="API key for authentication")
    auto_reload: bool = Field(default=False, description="Generate and reload configuration after each change")
    request_timeout: int = Field(default=30, description="Request timeout in seconds")

    @field_validator('protocol')
    @classmethod
    def validate_protocol(cls, v: str) -> str:
        """Only http and https are supported."""
        v = (v or "").strip().lower()
        if v not in ('http', 'https'):
            raise ValueError(f"protocol must be 'http' or 'https', got: {v!r}")
        return v

    @field_validator('port', mode='before')
    @classmethod
    def validate_port(cls, v: Union[str, int]) -> str:
        """Accept the port as string or int, keep it as a string."""
        v = str(v).strip()
        if not v.isdigit() or not 0 < int(v) < 65536:
            raise ValueError(f"port must be a number between 1 and 65535, got: {v!r}")
        return v

    @field_validator('server', 'api_version', 'api_key')
    @classmethod
    def validate_required_strings(cls, v: str) -> str:
        """Validate required string fields are not empty."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator('request_timeout')
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        """Validate request_timeout is reasonable."""
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        if v > 300:  # 5 minutes
            raise ValueError("request_timeout should not exceed 300 seconds")
        return v

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.server}:{self.port}/centreon/api/{self.api_version}"


class AppConfig(BaseModel):
    """Main application configuration."""

    centreon: ProviderConfig
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(None, description="Optional log file path")


CONFIG_SUFFIXES = ('.yaml', '.yml', '.toml', '.json')


def _read_yaml(f) -> Any:
    return yaml.safe_load(f)


def _read_toml(f) -> Any:
    return tomli.load(f.buffer)


_READERS = {
    '.yaml': _read_yaml,
    '.yml': _read_yaml,
    '.toml': _read_toml,
    '.json': json.load,
}


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML, TOML or JSON document whose top level is a mapping.

    Used for provider configuration files and for desired-host files.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    reader = _READERS.get(config_path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    logger = logging.getLogger(__name__)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = reader(f)
    except Exception as e:
        logger.error(f"Failed to load config file {config_path}: {e}")
        raise

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level, got {type(data).__name__}")
    return data


def config_search_paths() -> List[Path]:
    """Candidate files, most specific first.

    The working directory is only searched for the hidden
    ``.centreon-provider.*`` names so an unrelated ``config.yaml`` is never
    picked up; the user directory holds plain ``config.*`` files.
    """
    user_dir = Path.home() / ".config" / "centreon-provider"
    return (
        [Path.cwd() / f".centreon-provider{suffix}" for suffix in CONFIG_SUFFIXES]
        + [user_dir / f"config{suffix}" for suffix in CONFIG_SUFFIXES]
    )


def find_config_file() -> Optional[Path]:
    """Return the first existing provider configuration file, if any."""
    for config_path in config_search_paths():
        if config_path.is_file():
            return config_path
    return None


def merge_config(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two configuration mappings; neither input is modified.

    Only the ``centreon`` section nests, so recursion stops at mappings on
    both sides and anything else in ``override_config`` replaces the base.
    """
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = merge_config(current, value)
        merged[key] = value
    return merged


def load_config(config_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load configuration from multiple sources with priority order.

    Priority (highest to lowest):
    1. Environment variables
    2. Specified config file (if provided)
    3. Auto-discovered config file
    4. Default values
    """
    logger = logging.getLogger(__name__)

    config_data = {}

    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            config_data = load_config_file(config_path)
            logger.info(f"Loaded configuration from: {config_path}")
        else:
            raise FileNotFoundError(f"Specified config file not found: {config_path}")
    else:
        config_path = find_config_file()
        if config_path:
            config_data = load_config_file(config_path)
            logger.info(f"Auto-discovered configuration file: {config_path}")

    load_dotenv()

    env_config = {
        "centreon": {
            "protocol": os.getenv("CENTREON_PROTOCOL"),
            "server": os.getenv("CENTREON_SERVER"),
            "port": os.getenv("CENTREON_PORT"),
            "api_version": os.getenv("CENTREON_API_VERSION"),
            "api_key": os.getenv("CENTREON_API_KEY"),
            "auto_reload": os.getenv("CENTREON_AUTO_RELOAD"),
            "request_timeout": os.getenv("CENTREON_REQUEST_TIMEOUT"),
        },
        "log_level": os.getenv("LOG_LEVEL"),
        "log_file": os.getenv("TF_LOG_PATH"),
    }

    def remove_none_values(d):
        if isinstance(d, dict):
            return {k: remove_none_values(v) for k, v in d.items() if v is not None}
        return d

    env_config = remove_none_values(env_config)

    final_config = merge_config(config_data, env_config)

    centreon_data = final_config.get("centreon", {})

    # Handle boolean environment variables
    auto_reload = centreon_data.get("auto_reload", False)
    if isinstance(auto_reload, str):
        auto_reload = auto_reload.lower() in TRUE_STRINGS

    centreon_config = ProviderConfig(
        protocol=centreon_data.get("protocol", "https"),
        server=centreon_data.get("server", ""),
        port=centreon_data.get("port", "443"),
        api_version=centreon_data.get("api_version", "latest"),
        api_key=centreon_data.get("api_key", ""),
        auto_reload=auto_reload,
        request_timeout=int(centreon_data.get("request_timeout", 30)),
    )

    return AppConfig(
        centreon=centreon_config,
        log_level=final_config.get("log_level", "INFO"),
        log_file=final_config.get("log_file"),
    )
