"""Resources and data sources exposed by the provider."""

from .base import BaseDataSource, BaseResource, OperationResult
from .data_sources import (
    CollectionDataSource,
    ConfigurationHostsDataSource,
    HostGroupsDataSource,
    HostsDataSource,
    HostTemplatesDataSource,
    MonitoringServersDataSource,
    PlatformInfoDataSource,
)
from .host_resource import HostPlan, HostResource, merge_macros

__all__ = [
    "BaseDataSource",
    "BaseResource",
    "CollectionDataSource",
    "ConfigurationHostsDataSource",
    "HostGroupsDataSource",
    "HostPlan",
    "HostResource",
    "HostTemplatesDataSource",
    "HostsDataSource",
    "MonitoringServersDataSource",
    "OperationResult",
    "PlatformInfoDataSource",
    "merge_macros",
]
