"""Pytest configuration and shared fixtures."""

import pytest
import os
import logging
from unittest.mock import Mock

from centreon_provider.config import ProviderConfig
from centreon_provider.models.hosts import HostSpec, Macro

# Disable logging during tests to reduce noise
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before each test."""
    env_vars_to_clean = [
        "CENTREON_PROTOCOL",
        "CENTREON_SERVER",
        "CENTREON_PORT",
        "CENTREON_API_VERSION",
        "CENTREON_API_KEY",
        "CENTREON_AUTO_RELOAD",
        "CENTREON_REQUEST_TIMEOUT",
        "LOG_LEVEL",
        "TF_LOG_PATH",
    ]

    # Store original values
    original_values = {}
    for var in env_vars_to_clean:
        original_values[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    # Restore original values
    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def provider_config():
    """Connection settings with auto-reload disabled."""
    return ProviderConfig(
        protocol="https",
        server="centreon.example.com",
        port="443",
        api_version="latest",
        api_key="test-api-key",
    )


@pytest.fixture
def reload_config(provider_config):
    """Connection settings with auto-reload enabled."""
    return provider_config.model_copy(update={"auto_reload": True})


@pytest.fixture
def mock_client(provider_config):
    """A CentreonClient stand-in; methods return empty results by default."""
    client = Mock()
    client.config = provider_config
    client.find_host_by_name.return_value = None
    client.get_host_macros.return_value = []
    client.create_host.return_value = {}
    client.update_host.return_value = None
    client.delete_host.return_value = None
    client.generate_and_reload_configuration.return_value = None
    return client


@pytest.fixture
def host_spec():
    """A desired host with a mix of set and unset fields."""
    return HostSpec(
        monitoring_server_id=1,
        name="web01",
        address="10.0.0.1",
        alias="Web server",
        snmp_community="secret",
        snmp_version="2c",
        max_check_attempts=3,
        notification_options=5,
        active_check_enabled=1,
        passive_check_enabled=2,
        groups=[3, 1],
        templates=[2],
        macros=[Macro(name="A", value="1")],
    )


@pytest.fixture
def sample_host_wire():
    """A host as returned by GET /configuration/hosts."""
    return {
        "id": 42,
        "name": "web01",
        "alias": "Web server",
        "address": "10.0.0.1",
        "monitoring_server": {"id": 1, "name": "Central"},
        "templates": [{"id": 2, "name": "generic-host"}],
        "normal_check_interval": None,
        "retry_check_interval": None,
        "check_timeperiod": None,
        "notification_timeperiod": None,
        "severity": None,
        "categories": [],
        "groups": [{"id": 1, "name": "linux"}, {"id": 3, "name": "web"}],
        "is_activated": True,
    }


@pytest.fixture
def sample_list_response(sample_host_wire):
    return {
        "result": [sample_host_wire],
        "meta": {"page": 1, "limit": 1, "search": {}, "sort_by": {}, "total": 1},
    }
