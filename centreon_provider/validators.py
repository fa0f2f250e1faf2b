"""Stateless validators for host attributes.

Every validator takes a single value and returns a list of diagnostics,
empty when the value is acceptable. ``None`` means "not configured" and is
always accepted. No validator touches the network.
"""

import ipaddress
import re
from typing import Any, List, Optional

from .fields import TRISTATE_FIELDS, TriState
from .diagnostics import Diagnostic

SNMP_VERSIONS = ("1", "2c", "3")

HOSTNAME_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*$"
)
DOTTED_NUMERIC_PATTERN = re.compile(r"^[0-9.]+$")
LATITUDE_PATTERN = re.compile(r"^-?([0-9]|[1-8][0-9]|90)(\.[0-9]+)?$")
LONGITUDE_PATTERN = re.compile(r"^-?([0-9]|[1-9][0-9]|1[0-7][0-9]|180)(\.[0-9]+)?$")

NOTIFY_DOWN = 1
NOTIFY_UNREACHABLE = 2
NOTIFY_RECOVERY = 4
NOTIFY_FLAPPING = 8
NOTIFY_DOWNTIME_SCHEDULED = 16
NOTIFICATION_OPTIONS_MASK = (
    NOTIFY_DOWN | NOTIFY_UNREACHABLE | NOTIFY_RECOVERY | NOTIFY_FLAPPING | NOTIFY_DOWNTIME_SCHEDULED
)


def is_ip_address(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def validate_address(value: Optional[str], attribute: str = "address") -> List[Diagnostic]:
    """Accept an IPv4/IPv6 literal or an RFC 1123 style hostname.

    Underscores are not part of the hostname pattern, so ``host_underscore``
    is rejected. Strings made only of digits and dots must be valid IPv4
    literals: ``300.1.1.1`` is rejected.
    """
    if value is None:
        return []

    if is_ip_address(value):
        return []

    if not DOTTED_NUMERIC_PATTERN.fullmatch(value) and HOSTNAME_PATTERN.fullmatch(value):
        return []

    return [
        Diagnostic.error(
            "Invalid Address",
            f"{value} is neither a valid IP address nor a valid hostname",
            attribute,
        )
    ]


def validate_snmp_version(value: Optional[str], attribute: str = "snmp_version") -> List[Diagnostic]:
    if value is None or value in SNMP_VERSIONS:
        return []
    return [
        Diagnostic.error(
            "Invalid SNMP Version",
            f"SNMP version must be one of: 1, 2c, or 3, got: {value}",
            attribute,
        )
    ]


def validate_geo_coords(value: Optional[str], attribute: str = "geo_coords") -> List[Diagnostic]:
    """Check ``latitude,longitude`` with each part in its degree range."""
    if value is None:
        return []

    parts = value.split(",")
    if len(parts) != 2:
        return [
            Diagnostic.error(
                "Invalid Geographic Coordinates",
                f"Coordinates must be in format 'latitude,longitude', got: {value}",
                attribute,
            )
        ]

    diagnostics = []
    latitude, longitude = (p.strip() for p in parts)

    if not LATITUDE_PATTERN.fullmatch(latitude) or abs(float(latitude)) > 90:
        diagnostics.append(
            Diagnostic.error(
                "Invalid Latitude",
                f"Latitude must be between -90 and 90 degrees, got: {latitude}",
                attribute,
            )
        )
    if not LONGITUDE_PATTERN.fullmatch(longitude) or abs(float(longitude)) > 180:
        diagnostics.append(
            Diagnostic.error(
                "Invalid Longitude",
                f"Longitude must be between -180 and 180 degrees, got: {longitude}",
                attribute,
            )
        )
    return diagnostics


def validate_notification_options(
    value: Optional[int], attribute: str = "notification_options"
) -> List[Diagnostic]:
    """Allow any combination of the known notification flag bits."""
    if value is None:
        return []

    if value >= 0 and (value & ~NOTIFICATION_OPTIONS_MASK) == 0:
        return []

    return [
        Diagnostic.error(
            "Invalid Notification Options",
            "Notification options must be a valid combination of: 1=DOWN, 2=UNREACHABLE, "
            f"4=RECOVERY, 8=FLAPPING, 16=DOWNTIME_SCHEDULED. Got: {value}",
            attribute,
        )
    ]


def validate_tristate(value: Any, attribute: str) -> List[Diagnostic]:
    try:
        TriState.parse(value)
    except ValueError as e:
        return [Diagnostic.error("Invalid Flag Value", str(e), attribute)]
    return []


def validate_host(host: Any) -> List[Diagnostic]:
    """Run every attribute validator over a host and collect the diagnostics."""
    diagnostics = []
    diagnostics.extend(validate_address(getattr(host, "address", None)))
    diagnostics.extend(validate_snmp_version(getattr(host, "snmp_version", None)))
    diagnostics.extend(validate_geo_coords(getattr(host, "geo_coords", None)))
    diagnostics.extend(validate_notification_options(getattr(host, "notification_options", None)))
    for name in TRISTATE_FIELDS:
        diagnostics.extend(validate_tristate(getattr(host, name, None), name))
    return diagnostics
