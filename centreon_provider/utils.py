"""Common utilities for the Centreon provider."""

import json
from typing import Any, Dict, List, Optional


def extract_error_message(error_response: Any) -> str:
    """Extract meaningful error message from API response."""
    if isinstance(error_response, dict):
        # Centreon error bodies look like {"code": 400, "message": "..."}
        if "message" in error_response:
            return str(error_response["message"])
        elif "detail" in error_response:
            return str(error_response["detail"])
        elif "error" in error_response:
            return str(error_response["error"])
        elif "title" in error_response:
            return str(error_response["title"])

    return str(error_response)


def build_search_query(name: Optional[str] = None, value: Optional[str] = None) -> str:
    """
    Build the JSON ``search`` parameter understood by Centreon collections.

    Both the field name and the value must be set for a filter to apply;
    otherwise the empty filter ``{}`` is returned.

    Examples:
        >>> build_search_query("name", "web01")
        '{"name": "web01"}'
        >>> build_search_query("name", None)
        '{}'
    """
    if name is None or value is None:
        return "{}"
    return json.dumps({name: value})


def parse_search_option(search: Optional[str]) -> Dict[str, Optional[str]]:
    """Split a ``NAME=VALUE`` command-line filter into its parts."""
    if not search:
        return {"name": None, "value": None}

    if "=" not in search:
        raise ValueError(f"Search filter must look like NAME=VALUE, got: {search}")

    name, value = search.split("=", 1)
    name = name.strip()
    if not name:
        raise ValueError(f"Search filter is missing a field name: {search}")
    return {"name": name, "value": value.strip()}


def ref_id(value: Any) -> Optional[int]:
    """Return the id of an ``{id, name}`` reference, or the value if it is already an id."""
    if value is None:
        return None
    if isinstance(value, dict):
        return value.get("id")
    return int(value)


def ref_ids(values: Optional[List[Any]]) -> Optional[List[int]]:
    """Apply :func:`ref_id` over a list of references."""
    if values is None:
        return None
    ids = [ref_id(v) for v in values]
    return [i for i in ids if i is not None]


def format_host_response(host_data: Dict[str, Any]) -> str:
    """Format host data for human-readable output."""
    if not host_data:
        return "No host data available"

    monitoring_server = host_data.get("monitoring_server") or {}
    groups = ", ".join(g.get("name", str(g.get("id"))) for g in host_data.get("groups") or [])
    templates = ", ".join(t.get("name", str(t.get("id"))) for t in host_data.get("templates") or [])

    output = f"Host: {host_data.get('name', 'Unknown')} (id {host_data.get('id', '?')})\n"
    output += f"  Alias: {host_data.get('alias') or 'No alias'}\n"
    output += f"  Address: {host_data.get('address', 'Not set')}\n"
    output += f"  Monitoring server: {monitoring_server.get('name', 'Unknown')}\n"
    output += f"  Templates: {templates or 'None'}\n"
    output += f"  Groups: {groups or 'None'}\n"
    output += f"  Activated: {'Yes' if host_data.get('is_activated') else 'No'}\n"

    return output
