"""Pydantic models for read-only configuration objects."""

from typing import List, Optional

from pydantic import BaseModel, Field


class PlatformInfo(BaseModel):
    """Centreon platform installation status."""

    is_installed: bool = Field(description="Indicates if Centreon is installed")
    has_upgrade_available: bool = Field(description="Indicates if an upgrade is available")


class SearchFilter(BaseModel):
    """Single ``field == value`` search criterion."""

    name: Optional[str] = Field(None, description="Field name to search")
    value: Optional[str] = Field(None, description="Value to search for")


class ListMeta(BaseModel):
    """Pagination metadata returned alongside collection results."""

    page: Optional[int] = None
    limit: Optional[int] = None
    total: Optional[int] = None


class MonitoringServer(BaseModel):
    """A Centreon poller."""

    id: int = Field(description="Server ID")
    name: str = Field(description="Server name")
    address: Optional[str] = Field(None, description="Server address")
    is_localhost: bool = Field(False, description="Whether this is the localhost")
    is_default: bool = Field(False, description="Whether this is the default server")
    ssh_port: Optional[int] = Field(None, description="SSH port")
    last_restart: Optional[str] = Field(None, description="Last restart time")
    engine_start_command: Optional[str] = None
    engine_stop_command: Optional[str] = None
    engine_restart_command: Optional[str] = None
    engine_reload_command: Optional[str] = None
    nagios_bin: Optional[str] = None
    nagiostats_bin: Optional[str] = None
    broker_reload_command: Optional[str] = None
    centreonbroker_cfg_path: Optional[str] = None
    centreonbroker_module_path: Optional[str] = None
    centreonbroker_logs_path: Optional[str] = None
    centreonconnector_path: Optional[str] = None
    init_script_centreontrapd: Optional[str] = None
    snmp_trapd_path_conf: Optional[str] = None
    remote_id: Optional[int] = None
    remote_server_use_as_proxy: bool = False
    is_updated: bool = False
    is_activate: bool = True


class HostGroup(BaseModel):
    id: int = Field(description="Group ID")
    name: str = Field(description="Group name")


class HostTemplate(BaseModel):
    """A host template; most attributes are optional on templates."""

    id: int = Field(description="Template ID")
    name: str = Field(description="Template name")
    alias: Optional[str] = None
    snmp_version: Optional[str] = None
    timezone_id: Optional[int] = None
    severity_id: Optional[int] = None
    check_command_id: Optional[int] = None
    check_command_args: Optional[List[str]] = None
    check_timeperiod_id: Optional[int] = None
    max_check_attempts: Optional[int] = None
    normal_check_interval: Optional[int] = None
    retry_check_interval: Optional[int] = None
    active_check_enabled: Optional[int] = None
    passive_check_enabled: Optional[int] = None
    notification_enabled: Optional[int] = None
    notification_options: Optional[int] = None
    notification_interval: Optional[int] = None
    notification_timeperiod_id: Optional[int] = None
    add_inherited_contact_group: Optional[bool] = None
    add_inherited_contact: Optional[bool] = None
    first_notification_delay: Optional[int] = None
    recovery_notification_delay: Optional[int] = None
    acknowledgement_timeout: Optional[int] = None
    freshness_checked: Optional[int] = None
    freshness_threshold: Optional[int] = None
    flap_detection_enabled: Optional[int] = None
    low_flap_threshold: Optional[int] = None
    high_flap_threshold: Optional[int] = None
    event_handler_enabled: Optional[int] = None
    event_handler_command_id: Optional[int] = None
    event_handler_command_args: Optional[List[str]] = None
    note_url: Optional[str] = None
    note: Optional[str] = None
    action_url: Optional[str] = None
    icon_id: Optional[int] = None
    icon_alternative: Optional[str] = None
    comment: Optional[str] = None
    is_locked: bool = False
