"""Tests for the host resource lifecycle."""

import pytest
from unittest.mock import call

from centreon_provider.errors import (
    CentreonAPIError,
    CentreonTransportError,
    ConfigurationReloadError,
    HostValidationError,
    ResourceNotFoundError,
)
from centreon_provider.fields import TriState
from centreon_provider.models.hosts import HostSpec, Macro
from centreon_provider.services.host_resource import HostPlan, HostResource, merge_macros


@pytest.fixture
def resource(mock_client):
    return HostResource(mock_client)


@pytest.fixture
def reload_resource(mock_client, reload_config):
    mock_client.config = reload_config
    return HostResource(mock_client)


def reload_failure():
    return CentreonAPIError.from_response(500, "poller unreachable", endpoint="configuration/monitoring-servers/generate-and-reload")


class TestCreate:
    """Test host creation."""

    def test_type_name(self, resource):
        assert resource.type_name("centreon") == "centreon_host"

    def test_create_sends_sparse_payload(self, resource, mock_client, host_spec):
        state = resource.create(host_spec)

        assert state == host_spec
        payload = mock_client.create_host.call_args[0][0]
        assert payload["name"] == "web01"
        assert payload["active_check_enabled"] == 1
        assert "passive_check_enabled" not in payload
        assert "geo_coords" not in payload
        assert payload["macros"] == [{"name": "A", "value": "1", "is_password": False}]

    def test_create_validation_failure_makes_no_call(self, resource, mock_client, host_spec):
        invalid = host_spec.model_copy(update={"address": "300.1.1.1"})

        with pytest.raises(HostValidationError) as exc_info:
            resource.create(invalid)

        assert exc_info.value.diagnostics[0].attribute == "address"
        mock_client.create_host.assert_not_called()
        mock_client.find_host_by_name.assert_not_called()

    def test_create_api_error_propagates(self, resource, mock_client, host_spec):
        mock_client.create_host.side_effect = CentreonAPIError.from_response(409, "Host already exists")

        with pytest.raises(CentreonAPIError) as exc_info:
            resource.create(host_spec)

        assert exc_info.value.code == "CONFLICT"
        assert mock_client.create_host.call_count == 1

    def test_create_without_auto_reload_makes_no_reload_call(self, resource, mock_client, host_spec):
        resource.create(host_spec)

        mock_client.generate_and_reload_configuration.assert_not_called()

    def test_create_with_auto_reload_reloads_once(self, reload_resource, mock_client, host_spec):
        reload_resource.create(host_spec)

        mock_client.generate_and_reload_configuration.assert_called_once_with()

    def test_create_reload_failure_names_create_and_keeps_state(self, reload_resource, mock_client, host_spec):
        mock_client.generate_and_reload_configuration.side_effect = reload_failure()

        with pytest.raises(ConfigurationReloadError) as exc_info:
            reload_resource.create(host_spec)

        error = exc_info.value
        assert error.operation == "create"
        assert error.resource_name == "web01"
        assert error.state == host_spec
        assert isinstance(error.cause, CentreonAPIError)
        mock_client.create_host.assert_called_once()


class TestRead:
    """Test refreshing state from the remote host."""

    def test_read_absent_returns_none(self, resource, mock_client, host_spec):
        assert resource.read(host_spec) is None
        mock_client.get_host_macros.assert_not_called()

    def test_read_looks_up_by_exact_name(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.get_host_macros.return_value = [{"name": "A", "value": "1", "is_password": False}]

        resource.read(host_spec)

        mock_client.find_host_by_name.assert_called_once_with("web01")
        mock_client.get_host_macros.assert_called_once_with(42)

    def test_read_keeps_fields_the_remote_does_not_return(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.get_host_macros.return_value = [{"name": "A", "value": "1", "is_password": False}]

        state = resource.read(host_spec)

        assert state.snmp_community == "secret"
        assert state.max_check_attempts == 3
        assert state.active_check_enabled == TriState.explicit(1)
        assert state.groups == [1, 3]
        assert state.macros == [Macro(name="A", value="1")]

    def test_read_reflects_remote_changes(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = dict(sample_host_wire, alias="Changed", address="10.0.0.2")

        state = resource.read(host_spec)

        assert state.alias == "Changed"
        assert state.address == "10.0.0.2"
        assert state.macros is None

    def test_read_keeps_withheld_secret_macro_values(self, resource, mock_client, sample_host_wire):
        prior = HostSpec(
            monitoring_server_id=1,
            name="web01",
            address="10.0.0.1",
            macros=[Macro(name="PW", value="s3cret", is_password=True)],
        )
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.get_host_macros.return_value = [{"name": "PW", "value": None, "is_password": True}]

        state = resource.read(prior)

        assert state.macros == [Macro(name="PW", value="s3cret", is_password=True)]

    def test_read_null_boolean_keeps_prior_value(self, resource, mock_client, host_spec, sample_host_wire):
        prior = host_spec.model_copy(update={"is_activated": False, "add_inherited_contact": True})
        mock_client.find_host_by_name.return_value = dict(
            sample_host_wire, is_activated=None, add_inherited_contact=None, add_inherited_contact_group=None
        )

        state = resource.read(prior)

        assert state.is_activated is False
        assert state.add_inherited_contact is True
        assert state.add_inherited_contact_group is False

    def test_read_transport_error_propagates(self, resource, mock_client, host_spec):
        mock_client.find_host_by_name.side_effect = CentreonTransportError("Connection refused")

        with pytest.raises(CentreonTransportError):
            resource.read(host_spec)


class TestUpdate:
    """Test partial updates."""

    def test_update_not_found_makes_no_mutating_call(self, resource, mock_client, host_spec):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            resource.update(host_spec, host_spec)

        assert exc_info.value.name == "web01"
        mock_client.update_host.assert_not_called()
        mock_client.create_host.assert_not_called()

    def test_update_sends_only_set_fields(self, resource, mock_client, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        plan = HostSpec(monitoring_server_id=1, name="web01", address="10.0.0.1", alias="New alias")

        resource.update(plan, plan)

        host_id, payload = mock_client.update_host.call_args[0]
        assert host_id == 42
        assert payload == {
            "monitoring_server_id": 1,
            "name": "web01",
            "address": "10.0.0.1",
            "alias": "New alias",
            "add_inherited_contact_group": False,
            "add_inherited_contact": False,
            "is_activated": True,
        }

    def test_update_sends_macros_in_full(self, resource, mock_client, host_spec, sample_host_wire):
        """Remote macros A and B, desired A only: the payload carries only A."""
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.get_host_macros.return_value = [
            {"name": "A", "value": "old", "is_password": False},
            {"name": "B", "value": "2", "is_password": False},
        ]

        resource.update(host_spec, host_spec)

        payload = mock_client.update_host.call_args[0][1]
        assert payload["macros"] == [{"name": "A", "value": "1", "is_password": False}]

    def test_update_resolves_previous_name_on_rename(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        renamed = host_spec.model_copy(update={"name": "web01-new"})

        resource.update(renamed, host_spec)

        mock_client.find_host_by_name.assert_called_once_with("web01")
        assert mock_client.update_host.call_args[0][1]["name"] == "web01-new"

    def test_update_validation_failure_makes_no_call(self, resource, mock_client, host_spec):
        invalid = host_spec.model_copy(update={"geo_coords": "91,0"})

        with pytest.raises(HostValidationError):
            resource.update(invalid, host_spec)

        mock_client.find_host_by_name.assert_not_called()

    def test_update_with_auto_reload(self, reload_resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire

        reload_resource.update(host_spec, host_spec)

        mock_client.generate_and_reload_configuration.assert_called_once_with()

    def test_update_reload_failure_names_update(self, reload_resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.generate_and_reload_configuration.side_effect = reload_failure()

        with pytest.raises(ConfigurationReloadError) as exc_info:
            reload_resource.update(host_spec, host_spec)

        assert exc_info.value.operation == "update"
        assert exc_info.value.state == host_spec


class TestDelete:
    """Test idempotent deletion."""

    def test_delete_existing_host(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire

        assert resource.delete(host_spec) is None

        mock_client.delete_host.assert_called_once_with(42)

    def test_delete_absent_host_is_success(self, reload_resource, mock_client, host_spec):
        assert reload_resource.delete(host_spec) is None

        mock_client.delete_host.assert_not_called()
        mock_client.generate_and_reload_configuration.assert_not_called()

    def test_delete_with_auto_reload(self, reload_resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire

        reload_resource.delete(host_spec)

        assert mock_client.method_calls[-2:] == [
            call.delete_host(42),
            call.generate_and_reload_configuration(),
        ]

    def test_delete_reload_failure_names_delete(self, reload_resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.generate_and_reload_configuration.side_effect = reload_failure()

        with pytest.raises(ConfigurationReloadError) as exc_info:
            reload_resource.delete(host_spec)

        assert exc_info.value.operation == "delete"
        assert exc_info.value.state is None


class TestPlan:
    """Test drift reporting."""

    def test_plan_absent_host(self, resource, host_spec):
        plan = resource.plan(host_spec)

        assert plan == HostPlan(action="create", name="web01")

    def test_plan_in_sync(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = sample_host_wire
        mock_client.get_host_macros.return_value = [{"name": "A", "value": "1", "is_password": False}]

        plan = resource.plan(host_spec)

        assert plan.action == "none"
        assert plan.host_id == 42
        assert plan.changes == {}

    def test_plan_reports_changes(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = dict(sample_host_wire, alias="Old alias")
        mock_client.get_host_macros.return_value = [{"name": "A", "value": "1", "is_password": False}]

        plan = resource.plan(host_spec)

        assert plan.action == "update"
        assert plan.changes == {"alias": ("Old alias", "Web server")}
        mock_client.update_host.assert_not_called()


class TestExecute:
    """Test mapping of outcomes to diagnostics."""

    def test_success(self, resource, host_spec):
        result = resource.execute("create", host_spec)

        assert result.success is True
        assert result.state == host_spec
        assert result.diagnostics == []
        assert result.execution_time_ms is not None

    def test_validation_failure_reports_every_problem(self, resource, host_spec):
        invalid = host_spec.model_copy(update={"address": "host_underscore", "notification_options": 32})

        result = resource.execute("create", invalid)

        assert result.success is False
        assert {d.attribute for d in result.errors} == {"address", "notification_options"}

    def test_not_found_on_update(self, resource, host_spec):
        result = resource.execute("update", host_spec, host_spec)

        assert result.success is False
        assert "web01" in result.errors[0].detail

    def test_api_error_detail_includes_status_and_body(self, resource, mock_client, host_spec):
        mock_client.create_host.side_effect = CentreonAPIError.from_response(400, "address is invalid")

        result = resource.execute("create", host_spec)

        assert result.success is False
        assert "address is invalid" in result.errors[0].detail
        assert "400" in result.errors[0].detail

    def test_reload_failure_keeps_created_state(self, reload_resource, mock_client, host_spec):
        mock_client.generate_and_reload_configuration.side_effect = reload_failure()

        result = reload_resource.execute("create", host_spec)

        assert result.success is False
        assert result.state == host_spec
        assert "create" in result.errors[0].summary
        assert "poller unreachable" in result.errors[0].detail

    def test_undecodable_remote_host_is_reported(self, resource, mock_client, host_spec, sample_host_wire):
        mock_client.find_host_by_name.return_value = dict(sample_host_wire, active_check_enabled=7)

        result = resource.execute("read", host_spec)

        assert result.success is False
        assert result.state is None
        assert "read" in result.errors[0].summary
        assert "7" in result.errors[0].detail

    def test_read_absent_is_success_with_no_state(self, resource, host_spec):
        result = resource.execute("read", host_spec)

        assert result.success is True
        assert result.state is None

    def test_delete_absent_is_success(self, resource, host_spec):
        result = resource.execute("delete", host_spec)

        assert result.success is True


class TestMergeMacros:
    def test_non_password_values_come_from_remote(self):
        merged = merge_macros(
            [{"name": "A", "value": "remote", "is_password": False}],
            [Macro(name="A", value="local")],
        )

        assert merged == [Macro(name="A", value="remote")]

    def test_unknown_secret_stays_empty(self):
        merged = merge_macros([{"name": "PW", "is_password": True}], None)

        assert merged == [Macro(name="PW", is_password=True)]
