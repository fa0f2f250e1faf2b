"""Tests for the read-only data sources."""

import pytest

from centreon_provider.errors import CentreonAPIError
from centreon_provider.services.data_sources import (
    HostGroupsDataSource,
    HostsDataSource,
    HostTemplatesDataSource,
    MonitoringServersDataSource,
    PlatformInfoDataSource,
)


class TestPlatformInfoDataSource:
    def test_read(self, mock_client):
        mock_client.get_platform_info.return_value = {"is_installed": True, "has_upgrade_available": True}

        data = PlatformInfoDataSource(mock_client).read()

        assert data == {"id": "platform_info", "is_installed": True, "has_upgrade_available": True}

    def test_read_error_propagates(self, mock_client):
        mock_client.get_platform_info.side_effect = CentreonAPIError.from_response(401, "Invalid token")

        with pytest.raises(CentreonAPIError):
            PlatformInfoDataSource(mock_client).read()


class TestHostsDataSource:
    """Test the paged host listing."""

    def test_read_with_search(self, mock_client, sample_list_response):
        mock_client.list_hosts.return_value = sample_list_response

        data = HostsDataSource(mock_client).read(limit=1, page=1, search={"name": "name", "value": "web01"})

        mock_client.list_hosts.assert_called_once_with(
            limit=1, page=1, search={"name": "name", "value": "web01"}
        )
        assert data["meta"] == {"page": 1, "limit": 1, "total": 1}
        host = data["hosts"][0]
        assert host["id"] == 42
        assert host["monitoring_server"] == {"id": 1, "name": "Central"}
        assert [g["id"] for g in host["groups"]] == [1, 3]
        assert host["severity"] is None

    def test_read_defaults(self, mock_client):
        mock_client.list_hosts.return_value = {"result": []}

        data = HostsDataSource(mock_client).read()

        mock_client.list_hosts.assert_called_once_with(
            limit=10, page=1, search={"name": None, "value": None}
        )
        assert data["hosts"] == []
        assert data["meta"] == {"page": None, "limit": None, "total": None}

    def test_bare_ids_become_references(self, mock_client):
        mock_client.list_hosts.return_value = {
            "result": [{"id": 1, "name": "h", "monitoring_server": 5, "templates": [7]}]
        }

        host = HostsDataSource(mock_client).read()["hosts"][0]

        assert host["monitoring_server"] == {"id": 5, "name": None}
        assert host["templates"] == [{"id": 7, "name": None}]


class TestCollectionDataSources:
    """Test monitoring servers, host groups and host templates."""

    def test_monitoring_servers(self, mock_client):
        mock_client.list_monitoring_servers.return_value = {
            "result": [
                {
                    "id": 1,
                    "name": "Central",
                    "address": "127.0.0.1",
                    "is_localhost": True,
                    "is_default": True,
                    "ssh_port": 22,
                    "centreonbroker_logs_path": None,
                    "remote_id": None,
                    "is_activate": True,
                }
            ]
        }

        data = MonitoringServersDataSource(mock_client).read()

        server = data["servers"][0]
        assert server["name"] == "Central"
        assert server["is_localhost"] is True
        assert server["remote_id"] is None

    def test_host_groups(self, mock_client):
        mock_client.list_host_groups.return_value = {"result": [{"id": 3, "name": "web", "alias": "Web"}]}

        data = HostGroupsDataSource(mock_client).read(search={"name": "name", "value": "web"})

        assert data["groups"] == [{"id": 3, "name": "web"}]
        assert data["search"] == {"name": "name", "value": "web"}

    def test_host_templates(self, mock_client):
        mock_client.list_host_templates.return_value = {
            "result": [
                {
                    "id": 2,
                    "name": "generic-host",
                    "check_command_args": ["-H", "$HOSTADDRESS$"],
                    "active_check_enabled": 2,
                    "is_locked": True,
                }
            ]
        }

        data = HostTemplatesDataSource(mock_client).read(limit=50, page=2)

        template = data["templates"][0]
        assert template["check_command_args"] == ["-H", "$HOSTADDRESS$"]
        assert template["active_check_enabled"] == 2
        assert template["is_locked"] is True
        assert data["limit"] == 50
        assert data["page"] == 2

    @pytest.mark.parametrize(
        "data_source_class,type_name",
        [
            (PlatformInfoDataSource, "centreon_platform_info"),
            (HostsDataSource, "centreon_hosts"),
            (MonitoringServersDataSource, "centreon_monitoring_servers"),
            (HostGroupsDataSource, "centreon_host_groups"),
            (HostTemplatesDataSource, "centreon_host_templates"),
        ],
    )
    def test_type_names(self, mock_client, data_source_class, type_name):
        assert data_source_class(mock_client).type_name("centreon") == type_name
