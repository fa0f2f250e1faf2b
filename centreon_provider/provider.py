"""Provider entry point: configuration and resource/data source registries."""

from typing import Any, Dict, List, Optional, Type, Union

from pydantic import ValidationError

from .api_client import CentreonClient
from .config import ProviderConfig
from .diagnostics import Diagnostic
from .logging_utils import get_subsystem_logger
from .services.base import BaseDataSource, BaseResource
from .services.data_sources import (
    ConfigurationHostsDataSource,
    HostGroupsDataSource,
    HostsDataSource,
    HostTemplatesDataSource,
    MonitoringServersDataSource,
    PlatformInfoDataSource,
)
from .services.host_resource import HostResource

PROVIDER_TYPE_NAME = "centreon"

RESOURCE_TYPES: List[Type[BaseResource]] = [HostResource]

DATA_SOURCE_TYPES: List[Type[BaseDataSource]] = [
    PlatformInfoDataSource,
    HostsDataSource,
    ConfigurationHostsDataSource,
    MonitoringServersDataSource,
    HostGroupsDataSource,
    HostTemplatesDataSource,
]

REQUIRED_SETTINGS = ("protocol", "server", "port", "api_version", "api_key")


class CentreonProvider:
    """Configures one shared client and hands it to resources and data sources.

    The client is built once in :meth:`configure` and never changed
    afterwards; calling ``configure`` again replaces it as a whole.
    """

    def __init__(self, version: str = "dev"):
        self.version = version
        self.client: Optional[CentreonClient] = None
        self.logger = get_subsystem_logger(__name__)

    def metadata(self) -> Dict[str, str]:
        return {"type_name": PROVIDER_TYPE_NAME, "version": self.version}

    def configure(self, config: Union[ProviderConfig, Dict[str, Any]]) -> List[Diagnostic]:
        """Build the API client; problems are returned as diagnostics."""
        if not isinstance(config, ProviderConfig):
            missing = [key for key in REQUIRED_SETTINGS if config.get(key) in (None, "")]
            if missing:
                return [
                    Diagnostic.error(
                        "Missing Configuration",
                        f"All provider configuration fields are required, missing: {', '.join(missing)}",
                    )
                ]
            try:
                config = ProviderConfig(**config)
            except ValidationError as e:
                return [
                    Diagnostic.error("Invalid Configuration", err["msg"], ".".join(str(p) for p in err["loc"]))
                    for err in e.errors()
                ]

        self.client = CentreonClient(config)
        self.logger.info(
            "Configured Centreon client",
            fields={"base_url": config.base_url, "auto_reload": config.auto_reload},
        )
        return []

    def resources(self) -> Dict[str, Type[BaseResource]]:
        return {PROVIDER_TYPE_NAME + cls.type_suffix: cls for cls in RESOURCE_TYPES}

    def data_sources(self) -> Dict[str, Type[BaseDataSource]]:
        return {PROVIDER_TYPE_NAME + cls.type_suffix: cls for cls in DATA_SOURCE_TYPES}

    def _require_client(self) -> CentreonClient:
        if self.client is None:
            raise RuntimeError("Provider is not configured; call configure() first")
        return self.client

    def resource(self, type_name: str) -> BaseResource:
        """Instantiate a resource by its full type name, e.g. ``centreon_host``."""
        registry = self.resources()
        if type_name not in registry:
            raise ValueError(f"Unknown resource type: {type_name}")
        return registry[type_name](self._require_client())

    def data_source(self, type_name: str) -> BaseDataSource:
        """Instantiate a data source by its full type name."""
        registry = self.data_sources()
        if type_name not in registry:
            raise ValueError(f"Unknown data source type: {type_name}")
        return registry[type_name](self._require_client())
