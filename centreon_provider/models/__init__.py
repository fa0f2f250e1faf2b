"""Data models for Centreon objects."""

from .configuration import (
    HostGroup,
    HostTemplate,
    ListMeta,
    MonitoringServer,
    PlatformInfo,
    SearchFilter,
)
from .hosts import HostRecord, HostSpec, Macro, NamedRef

__all__ = [
    "HostGroup",
    "HostRecord",
    "HostSpec",
    "HostTemplate",
    "ListMeta",
    "Macro",
    "MonitoringServer",
    "NamedRef",
    "PlatformInfo",
    "SearchFilter",
]
