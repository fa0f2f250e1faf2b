"""Read-only data sources over Centreon configuration collections."""

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from ..api_client import DEFAULT_LIMIT, DEFAULT_PAGE
from ..logging_utils import bind_log_fields
from ..models.configuration import (
    HostGroup,
    HostTemplate,
    ListMeta,
    MonitoringServer,
    PlatformInfo,
    SearchFilter,
)
from ..models.hosts import HostRecord
from .base import BaseDataSource


class PlatformInfoDataSource(BaseDataSource):
    """Installation and upgrade status of the platform."""

    type_suffix = "_platform_info"

    def read(self, **arguments: Any) -> Dict[str, Any]:
        info = PlatformInfo(**self.client.get_platform_info())
        self.logger.debug(
            "Read platform info",
            fields={"is_installed": info.is_installed, "has_upgrade_available": info.has_upgrade_available},
        )
        return {"id": "platform_info", **info.model_dump()}


class CollectionDataSource(BaseDataSource):
    """A paged, searchable collection.

    Subclasses name the client method to call, the model each item is
    parsed into and the key the items are returned under.
    """

    list_method: str = ""
    item_model: Type[BaseModel] = BaseModel
    result_key: str = "items"

    def read(
        self,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
        search: Optional[Dict[str, Optional[str]]] = None,
        **arguments: Any,
    ) -> Dict[str, Any]:
        search_filter = SearchFilter(**(search or {}))

        with bind_log_fields(data_source=self.result_key):
            response = getattr(self.client, self.list_method)(
                limit=limit, page=page, search=search_filter.model_dump()
            )
            items = [self.item_model(**item) for item in response.get("result", [])]
            self.logger.debug(f"Read {len(items)} {self.result_key}", fields={"limit": limit, "page": page})

        return {
            "limit": limit,
            "page": page,
            "search": search_filter.model_dump(),
            "meta": ListMeta(**(response.get("meta") or {})).model_dump(),
            self.result_key: [item.model_dump() for item in items],
        }


class HostsDataSource(CollectionDataSource):
    type_suffix = "_hosts"
    list_method = "list_hosts"
    item_model = HostRecord
    result_key = "hosts"


class ConfigurationHostsDataSource(HostsDataSource):
    """Same lookup as :class:`HostsDataSource`, under its configuration API name."""

    type_suffix = "_configuration_hosts"


class MonitoringServersDataSource(CollectionDataSource):
    type_suffix = "_monitoring_servers"
    list_method = "list_monitoring_servers"
    item_model = MonitoringServer
    result_key = "servers"


class HostGroupsDataSource(CollectionDataSource):
    type_suffix = "_host_groups"
    list_method = "list_host_groups"
    item_model = HostGroup
    result_key = "groups"


class HostTemplatesDataSource(CollectionDataSource):
    type_suffix = "_host_templates"
    list_method = "list_host_templates"
    item_model = HostTemplate
    result_key = "templates"
