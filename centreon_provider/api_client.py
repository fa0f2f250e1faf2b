"""Centreon REST API client."""

import requests
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin

from .config import ProviderConfig
from .errors import CentreonAPIError, CentreonTransportError
from .logging_utils import get_subsystem_logger
from .utils import build_search_query, extract_error_message


DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1


class CentreonClient:
    """Client for interacting with the Centreon REST API.

    The client holds only the immutable configuration and an HTTP session;
    every call resolves what it needs from the remote side.
    """

    def __init__(self, config: ProviderConfig):
        self.config = config
        self.base_url = config.base_url
        self.session = requests.Session()
        self.logger = get_subsystem_logger(__name__)

        self.session.headers.update({
            'X-AUTH-TOKEN': config.api_key,
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        })
        self.logger.debug(f"Client configured for {self.base_url}")

    def _make_request(
        self,
        method: str,
        endpoint: str,
        expected_status: Tuple[int, ...] = (200,),
        **kwargs,
    ) -> Dict[str, Any]:
        """Make an HTTP request and decode the JSON body.

        Any status outside ``expected_status`` raises :class:`CentreonAPIError`
        with the response body attached; connection failures raise
        :class:`CentreonTransportError`. Nothing is retried.
        """
        # Ensure endpoint doesn't start with / to avoid urljoin path replacement
        if endpoint.startswith('/'):
            endpoint = endpoint[1:]
        url = urljoin(self.base_url + '/', endpoint)
        self.logger.debug(f"{method} {url}", fields={"params": kwargs.get("params")})

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.config.request_timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed: {e}")
            raise CentreonTransportError(f"Request failed: {e}", endpoint=endpoint) from e

        self.logger.debug(f"{method} {url} -> {response.status_code}")

        if response.status_code not in expected_status:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {"message": response.text}

            self.logger.debug(
                f"Unexpected status {response.status_code}: {extract_error_message(error_data)}"
            )
            raise CentreonAPIError.from_response(
                response.status_code,
                response.text,
                response_data=error_data if isinstance(error_data, dict) else None,
                endpoint=endpoint,
            )

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise CentreonAPIError(
                f"Invalid JSON in response: {e}",
                status_code=response.status_code,
                code="INVALID_RESPONSE",
                response_text=response.text,
                endpoint=endpoint,
            ) from e

    def _list(
        self,
        endpoint: str,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
        search: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        search = search or {}
        params = {
            'limit': limit,
            'page': page,
            'search': build_search_query(search.get('name'), search.get('value')),
        }
        return self._make_request('GET', endpoint, params=params)

    # Platform operations
    def get_platform_info(self) -> Dict[str, Any]:
        """
        Get the platform installation status.

        Returns:
            ``{"is_installed": bool, "has_upgrade_available": bool}``
        """
        response = self._make_request('GET', '/platform/installation/status')
        self.logger.info("Retrieved platform installation status")
        return response

    # Host operations
    def list_hosts(
        self,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
        search: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        """
        List host configurations.

        Args:
            limit: Page size
            page: Page number, starting at 1
            search: Optional ``{"name": field, "value": value}`` filter

        Returns:
            Raw collection response with ``result`` and ``meta`` keys
        """
        response = self._list('/configuration/hosts', limit, page, search)
        self.logger.info(f"Retrieved {len(response.get('result', []))} hosts")
        return response

    def find_host_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Look a host up by exact name.

        Returns:
            The host object, or None when no host has that name
        """
        response = self._list('/configuration/hosts', 1, 1, {'name': 'name', 'value': name})
        for host in response.get('result', []):
            if host.get('name') == name:
                return host

        self.logger.debug(f"No host named '{name}'")
        return None

    def create_host(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new host.

        Args:
            payload: Wire representation of the host, sentinel fields omitted

        Returns:
            Created host object (may be empty)
        """
        response = self._make_request(
            'POST',
            '/configuration/hosts',
            expected_status=(201,),
            json=payload,
        )
        self.logger.info(f"Created host: {payload.get('name')}")
        return response

    def update_host(self, host_id: int, payload: Dict[str, Any]) -> None:
        """
        Partially update an existing host.

        Args:
            host_id: Resolved host ID
            payload: Only the fields to change
        """
        self._make_request(
            'PATCH',
            f'/configuration/hosts/{host_id}',
            expected_status=(204,),
            json=payload,
        )
        self.logger.info(f"Updated host: {host_id}")

    def delete_host(self, host_id: int) -> None:
        self._make_request('DELETE', f'/configuration/hosts/{host_id}', expected_status=(204,))
        self.logger.info(f"Deleted host: {host_id}")

    def get_host_macros(self, host_id: int) -> List[Dict[str, Any]]:
        """
        Get the macros of a host.

        Password macro values are withheld by the API.
        """
        response = self._make_request('GET', f'/configuration/hosts/{host_id}/macros')
        macros = response.get('result', []) if isinstance(response, dict) else response
        self.logger.debug(f"Retrieved {len(macros)} macros for host {host_id}")
        return macros

    # Configuration collections
    def list_monitoring_servers(
        self,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
        search: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        response = self._list('/configuration/monitoring-servers', limit, page, search)
        self.logger.info(f"Retrieved {len(response.get('result', []))} monitoring servers")
        return response

    def list_host_groups(
        self,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
        search: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        response = self._list('/configuration/hosts/groups', limit, page, search)
        self.logger.info(f"Retrieved {len(response.get('result', []))} host groups")
        return response

    def list_host_templates(
        self,
        limit: int = DEFAULT_LIMIT,
        page: int = DEFAULT_PAGE,
        search: Optional[Dict[str, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        response = self._list('/configuration/hosts/templates', limit, page, search)
        self.logger.info(f"Retrieved {len(response.get('result', []))} host templates")
        return response

    def generate_and_reload_configuration(self) -> None:
        """Generate the configuration of all pollers and reload them."""
        self._make_request(
            'POST',
            '/configuration/monitoring-servers/generate-and-reload',
            expected_status=(200, 204),
        )
        self.logger.info("Generated and reloaded monitoring configuration")

    def test_connection(self) -> bool:
        """
        Test the connection to the Centreon API.

        Returns:
            True if connection is successful
        """
        self.logger.debug("Testing connection to Centreon API by reading platform status.")
        try:
            self.get_platform_info()
            self.logger.debug("Connection test succeeded.")
            return True
        except (CentreonAPIError, CentreonTransportError) as e:
            self.logger.error(f"Connection test failed: {e}")
            return False

    def close(self) -> None:
        self.session.close()
