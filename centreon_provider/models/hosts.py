"""Pydantic models for host resources."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..fields import TRISTATE_FIELDS, TriState, decode_fields


class NamedRef(BaseModel):
    """An ``{id, name}`` reference as returned by the API."""

    id: int = Field(description="Object ID")
    name: Optional[str] = Field(None, description="Object name")


class Macro(BaseModel):
    """A custom macro attached to a host."""

    name: str = Field(description="Macro name")
    value: Optional[str] = Field(
        None, description="Macro value; withheld by the API for password macros"
    )
    is_password: bool = Field(False, description="Whether the macro value is a password")
    description: Optional[str] = Field(None, description="Macro description")


class HostSpec(BaseModel):
    """Desired (and tracked) state of a Centreon host.

    ``None`` on an optional field means "not managed": the field is left
    out of create and update payloads. Tri-state flags use :class:`TriState`
    instead; their raw form is ``0``/``1`` for explicit values and ``2`` for
    "inherit the default".
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    monitoring_server_id: int = Field(description="ID of the host's monitoring server")
    name: str = Field(description="Host name")
    address: str = Field(description="IP or domain of the host")
    alias: Optional[str] = Field(None, description="Host alias")
    snmp_community: Optional[str] = Field(None, description="Community of the SNMP agent")
    snmp_version: Optional[str] = Field(None, description="Version of the SNMP agent (1, 2c, or 3)")
    geo_coords: Optional[str] = Field(None, description="Geographic coordinates 'lat,long'")
    timezone_id: Optional[int] = Field(None, description="Timezone ID")
    severity_id: Optional[int] = Field(None, description="Severity ID")
    check_command_id: Optional[int] = Field(None, description="Check command ID")
    check_command_args: Optional[List[str]] = Field(None, description="Check command arguments")
    check_timeperiod_id: Optional[int] = Field(None, description="Check timeperiod ID")
    max_check_attempts: Optional[int] = Field(None, description="Number of retry attempts for host checks")
    normal_check_interval: Optional[int] = Field(None, description="Interval between normal checks")
    retry_check_interval: Optional[int] = Field(None, description="Interval between retry checks")
    active_check_enabled: TriState = Field(default_factory=TriState.default, description="Active checks (0, 1, 2=default)")
    passive_check_enabled: TriState = Field(default_factory=TriState.default, description="Passive checks (0, 1, 2=default)")
    notification_enabled: TriState = Field(default_factory=TriState.default, description="Notifications (0, 1, 2=default)")
    notification_options: Optional[int] = Field(
        None,
        description="Sum of: 1=DOWN, 2=UNREACHABLE, 4=RECOVERY, 8=FLAPPING, 16=DOWNTIME_SCHEDULED",
    )
    notification_interval: Optional[int] = Field(None, description="Interval between notifications")
    notification_timeperiod_id: Optional[int] = Field(None, description="Notification timeperiod ID")
    add_inherited_contact_group: bool = Field(False, description="Whether to add inherited contact groups")
    add_inherited_contact: bool = Field(False, description="Whether to add inherited contacts")
    first_notification_delay: Optional[int] = Field(None, description="Delay before first notification")
    recovery_notification_delay: Optional[int] = Field(None, description="Delay before recovery notification")
    acknowledgement_timeout: Optional[int] = Field(None, description="Acknowledgement timeout")
    freshness_checked: TriState = Field(default_factory=TriState.default, description="Freshness check (0, 1, 2=default)")
    freshness_threshold: Optional[int] = Field(None, description="Freshness threshold in seconds")
    flap_detection_enabled: TriState = Field(default_factory=TriState.default, description="Flap detection (0, 1, 2=default)")
    low_flap_threshold: Optional[int] = Field(None, description="Low flap threshold")
    high_flap_threshold: Optional[int] = Field(None, description="High flap threshold")
    event_handler_enabled: TriState = Field(default_factory=TriState.default, description="Event handler (0, 1, 2=default)")
    event_handler_command_id: Optional[int] = Field(None, description="Event handler command ID")
    event_handler_command_args: Optional[List[str]] = Field(None, description="Event handler command arguments")
    note_url: Optional[str] = Field(None, description="URL with additional host information")
    note: Optional[str] = Field(None, description="Additional notes about the host")
    action_url: Optional[str] = Field(None, description="URL for additional host actions")
    icon_id: Optional[int] = Field(None, description="Icon ID")
    icon_alternative: Optional[str] = Field(None, description="Alternative text for icon")
    comment: Optional[str] = Field(None, description="Comments about the host")
    is_activated: bool = Field(True, description="Whether the host is activated")
    categories: Optional[List[int]] = Field(None, description="List of category IDs")
    groups: Optional[List[int]] = Field(None, description="List of group IDs")
    templates: Optional[List[int]] = Field(None, description="List of template IDs")
    macros: Optional[List[Macro]] = Field(None, description="Host macros")

    @field_validator(*TRISTATE_FIELDS, mode="before")
    @classmethod
    def parse_tristate(cls, v: Any) -> TriState:
        return TriState.parse(v)

    @field_serializer(*TRISTATE_FIELDS)
    def serialize_tristate(self, v: TriState) -> Optional[int]:
        return v.to_raw()

    @classmethod
    def from_wire(
        cls,
        wire: Dict[str, Any],
        prior: Optional["HostSpec"] = None,
        macros: Optional[List[Macro]] = None,
    ) -> "HostSpec":
        """Build the tracked state from a remote host, keeping prior values
        for everything the API did not return."""
        prior_fields = dict(prior) if prior is not None else {}
        fields = decode_fields(wire, prior_fields)
        if macros is not None:
            fields["macros"] = macros or None
        return cls(**fields)

    def to_state(self) -> Dict[str, Any]:
        """Plain data form, as stored in state or written to a file."""
        return self.model_dump(mode="json")


class HostRecord(BaseModel):
    """A host as returned by the host collection endpoint."""

    id: int = Field(description="Host ID")
    name: str = Field(description="Host name")
    alias: Optional[str] = Field(None, description="Host alias")
    address: Optional[str] = Field(None, description="Host address")
    monitoring_server: Optional[NamedRef] = Field(None, description="Monitoring server")
    templates: List[NamedRef] = Field(default_factory=list, description="Linked templates")
    groups: List[NamedRef] = Field(default_factory=list, description="Host groups")
    categories: List[NamedRef] = Field(default_factory=list, description="Host categories")
    normal_check_interval: Optional[int] = Field(None, description="Interval between normal checks")
    retry_check_interval: Optional[int] = Field(None, description="Interval between retry checks")
    check_timeperiod: Optional[NamedRef] = Field(None, description="Check timeperiod")
    notification_timeperiod: Optional[NamedRef] = Field(None, description="Notification timeperiod")
    severity: Optional[NamedRef] = Field(None, description="Severity")
    is_activated: bool = Field(True, description="Whether the host is activated")

    @field_validator(
        "monitoring_server", "check_timeperiod", "notification_timeperiod", "severity",
        mode="before",
    )
    @classmethod
    def coerce_ref(cls, v: Any) -> Any:
        if v is None or isinstance(v, dict):
            return v
        return {"id": v}

    @field_validator("templates", "groups", "categories", mode="before")
    @classmethod
    def coerce_refs(cls, v: Any) -> Any:
        if v is None:
            return []
        return [item if isinstance(item, dict) else {"id": item} for item in v]

