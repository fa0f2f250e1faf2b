"""Mapping between the local desired-state model and Centreon's wire JSON.

Three kinds of optional values exist on a host:

* tri-state flags, where ``2`` means "inherit the remote default" and is
  never transmitted; these are modelled by :class:`TriState`;
* plain optional scalars and lists, where ``None`` means "leave unset" and
  anything else, including ``0``, ``""`` and ``False``, is transmitted;
* the macro list, which the API always replaces as a whole.

Each host field is declared once in :data:`HOST_FIELDS`; encoding builds a
:class:`SparseFieldMap` holding only the fields that should be sent.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from .utils import ref_id, ref_ids


TRISTATE_DEFAULT = 2


class TriStateKind(str, Enum):
    """The three states of an inheritable flag."""

    UNSET = "unset"
    DEFAULT = "default"
    EXPLICIT = "explicit"


class TriState:
    """An on/off flag that can also be left unset or inherit its default.

    ``TriState.parse`` accepts the raw integer form used in configuration
    and by the API (``0``, ``1``, ``2``) as well as ``None``.
    """

    __slots__ = ("kind", "value")

    def __init__(self, kind: TriStateKind, value: Optional[int] = None):
        if kind is TriStateKind.EXPLICIT and value not in (0, 1):
            raise ValueError(f"Explicit tri-state value must be 0 or 1, got: {value!r}")
        if kind is not TriStateKind.EXPLICIT and value is not None:
            raise ValueError(f"Only explicit tri-states carry a value, got: {value!r}")
        self.kind = kind
        self.value = value

    @classmethod
    def unset(cls) -> "TriState":
        return cls(TriStateKind.UNSET)

    @classmethod
    def default(cls) -> "TriState":
        return cls(TriStateKind.DEFAULT)

    @classmethod
    def explicit(cls, value: int) -> "TriState":
        return cls(TriStateKind.EXPLICIT, int(value))

    @classmethod
    def parse(cls, raw: Any) -> "TriState":
        if isinstance(raw, TriState):
            return raw
        if raw is None:
            return cls.unset()
        if isinstance(raw, bool):
            return cls.explicit(int(raw))
        if isinstance(raw, float) and not raw.is_integer():
            raise ValueError(f"Tri-state value must be a whole number, got: {raw!r}")
        try:
            number = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid tri-state value: {raw!r}")
        if number == TRISTATE_DEFAULT:
            return cls.default()
        if number in (0, 1):
            return cls.explicit(number)
        raise ValueError(f"Tri-state value must be 0, 1 or 2, got: {raw!r}")

    @property
    def is_explicit(self) -> bool:
        return self.kind is TriStateKind.EXPLICIT

    def to_wire(self) -> Optional[int]:
        """Value to transmit, or None when the field must be omitted."""
        if self.kind is TriStateKind.EXPLICIT:
            return self.value
        if self.kind in (TriStateKind.DEFAULT, TriStateKind.UNSET):
            return None
        raise AssertionError(f"Unhandled tri-state kind: {self.kind}")

    def to_raw(self) -> Optional[int]:
        """Raw integer form used in state and configuration files."""
        if self.kind is TriStateKind.EXPLICIT:
            return self.value
        if self.kind is TriStateKind.DEFAULT:
            return TRISTATE_DEFAULT
        if self.kind is TriStateKind.UNSET:
            return None
        raise AssertionError(f"Unhandled tri-state kind: {self.kind}")

    def __eq__(self, other):
        if not isinstance(other, TriState):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.kind is TriStateKind.EXPLICIT:
            return f"TriState.explicit({self.value})"
        return f"TriState.{self.kind.value}()"


class FieldKind(str, Enum):
    REQUIRED = "required"
    TRISTATE = "tristate"
    OPTIONAL = "optional"
    BOOLEAN = "boolean"
    LIST = "list"
    MACROS = "macros"


class FieldSpec(NamedTuple):
    """Declaration of one host attribute.

    ``read_key`` names the key the list endpoint uses when it differs from
    the write key, e.g. ``check_timeperiod`` (an ``{id, name}`` reference)
    for ``check_timeperiod_id``.
    """

    name: str
    kind: FieldKind
    py_type: type = str
    read_key: Optional[str] = None


HOST_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("monitoring_server_id", FieldKind.REQUIRED, int, "monitoring_server"),
    FieldSpec("name", FieldKind.REQUIRED, str),
    FieldSpec("address", FieldKind.REQUIRED, str),
    FieldSpec("alias", FieldKind.OPTIONAL, str),
    FieldSpec("snmp_community", FieldKind.OPTIONAL, str),
    FieldSpec("snmp_version", FieldKind.OPTIONAL, str),
    FieldSpec("geo_coords", FieldKind.OPTIONAL, str),
    FieldSpec("timezone_id", FieldKind.OPTIONAL, int, "timezone"),
    FieldSpec("severity_id", FieldKind.OPTIONAL, int, "severity"),
    FieldSpec("check_command_id", FieldKind.OPTIONAL, int, "check_command"),
    FieldSpec("check_command_args", FieldKind.LIST, str),
    FieldSpec("check_timeperiod_id", FieldKind.OPTIONAL, int, "check_timeperiod"),
    FieldSpec("max_check_attempts", FieldKind.OPTIONAL, int),
    FieldSpec("normal_check_interval", FieldKind.OPTIONAL, int),
    FieldSpec("retry_check_interval", FieldKind.OPTIONAL, int),
    FieldSpec("active_check_enabled", FieldKind.TRISTATE, int),
    FieldSpec("passive_check_enabled", FieldKind.TRISTATE, int),
    FieldSpec("notification_enabled", FieldKind.TRISTATE, int),
    FieldSpec("notification_options", FieldKind.OPTIONAL, int),
    FieldSpec("notification_interval", FieldKind.OPTIONAL, int),
    FieldSpec("notification_timeperiod_id", FieldKind.OPTIONAL, int, "notification_timeperiod"),
    FieldSpec("add_inherited_contact_group", FieldKind.BOOLEAN, bool),
    FieldSpec("add_inherited_contact", FieldKind.BOOLEAN, bool),
    FieldSpec("first_notification_delay", FieldKind.OPTIONAL, int),
    FieldSpec("recovery_notification_delay", FieldKind.OPTIONAL, int),
    FieldSpec("acknowledgement_timeout", FieldKind.OPTIONAL, int),
    FieldSpec("freshness_checked", FieldKind.TRISTATE, int),
    FieldSpec("freshness_threshold", FieldKind.OPTIONAL, int),
    FieldSpec("flap_detection_enabled", FieldKind.TRISTATE, int),
    FieldSpec("low_flap_threshold", FieldKind.OPTIONAL, int),
    FieldSpec("high_flap_threshold", FieldKind.OPTIONAL, int),
    FieldSpec("event_handler_enabled", FieldKind.TRISTATE, int),
    FieldSpec("event_handler_command_id", FieldKind.OPTIONAL, int, "event_handler_command"),
    FieldSpec("event_handler_command_args", FieldKind.LIST, str),
    FieldSpec("note_url", FieldKind.OPTIONAL, str),
    FieldSpec("note", FieldKind.OPTIONAL, str),
    FieldSpec("action_url", FieldKind.OPTIONAL, str),
    FieldSpec("icon_id", FieldKind.OPTIONAL, int, "icon"),
    FieldSpec("icon_alternative", FieldKind.OPTIONAL, str),
    FieldSpec("comment", FieldKind.OPTIONAL, str),
    FieldSpec("is_activated", FieldKind.BOOLEAN, bool),
    FieldSpec("categories", FieldKind.LIST, int),
    FieldSpec("groups", FieldKind.LIST, int),
    FieldSpec("templates", FieldKind.LIST, int),
    FieldSpec("macros", FieldKind.MACROS, dict),
)

TRISTATE_FIELDS = tuple(f.name for f in HOST_FIELDS if f.kind is FieldKind.TRISTATE)


def encode_optional(value: Any) -> Any:
    """Return the value to send, or None to omit it.

    Explicit zero, empty string and False are sent as-is.
    """
    return value


def decode_optional(wire: Mapping[str, Any], key: str) -> Any:
    """Read a key from a wire object; absent keys and JSON null both become None."""
    return wire.get(key)


def encode_list(values: Optional[List[Any]]) -> Optional[List[Any]]:
    """Empty lists are omitted exactly like absent ones."""
    if not values:
        return None
    return list(values)


def encode_macros(macros: Optional[List[Any]]) -> Optional[List[Dict[str, Any]]]:
    """Encode the full macro list; the API replaces the remote list wholesale."""
    if not macros:
        return None

    encoded = []
    for macro in macros:
        data = macro.model_dump() if hasattr(macro, "model_dump") else dict(macro)
        entry = {"name": data["name"], "is_password": bool(data.get("is_password", False))}
        if data.get("value") is not None:
            entry["value"] = data["value"]
        if data.get("description") is not None:
            entry["description"] = data["description"]
        encoded.append(entry)
    return encoded


def encode_field(spec: FieldSpec, value: Any) -> Any:
    """Encode one field; None means the field is left out of the payload."""
    if spec.kind is FieldKind.REQUIRED:
        if value is None:
            raise ValueError(f"Required field '{spec.name}' is not set")
        return value
    if spec.kind is FieldKind.TRISTATE:
        return TriState.parse(value).to_wire()
    if spec.kind in (FieldKind.OPTIONAL, FieldKind.BOOLEAN):
        return encode_optional(value)
    if spec.kind is FieldKind.LIST:
        return encode_list(value)
    if spec.kind is FieldKind.MACROS:
        return encode_macros(value)
    raise AssertionError(f"Unhandled field kind: {spec.kind}")


class SparseFieldMap(Mapping[str, Any]):
    """Wire fields that are explicitly set; absence means "do not send"."""

    def __init__(self, fields: Optional[Dict[str, Any]] = None):
        self._fields = dict(fields or {})

    @classmethod
    def from_model(cls, model: Any, specs: Tuple[FieldSpec, ...] = HOST_FIELDS) -> "SparseFieldMap":
        fields = {}
        for spec in specs:
            encoded = encode_field(spec, getattr(model, spec.name, None))
            if encoded is not None:
                fields[spec.name] = encoded
        return cls(fields)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def is_set(self, key: str) -> bool:
        return key in self._fields

    @property
    def macros(self) -> Optional[List[Dict[str, Any]]]:
        return self._fields.get("macros")

    def without(self, *keys: str) -> "SparseFieldMap":
        return SparseFieldMap({k: v for k, v in self._fields.items() if k not in keys})

    def to_payload(self) -> Dict[str, Any]:
        payload = {}
        for key, value in self._fields.items():
            if isinstance(value, list):
                value = [dict(v) if isinstance(v, dict) else v for v in value]
            payload[key] = value
        return payload

    def __repr__(self):
        return f"SparseFieldMap({self._fields!r})"


def _read_raw(spec: FieldSpec, wire: Mapping[str, Any]) -> Tuple[bool, Any]:
    if spec.name in wire:
        return True, decode_optional(wire, spec.name)
    if spec.read_key and spec.read_key in wire:
        return True, ref_id(decode_optional(wire, spec.read_key))
    return False, None


def decode_fields(
    wire: Mapping[str, Any],
    prior: Optional[Mapping[str, Any]] = None,
    specs: Tuple[FieldSpec, ...] = HOST_FIELDS,
) -> Dict[str, Any]:
    """Merge a remote host representation into a copy of the prior state.

    Only keys the remote returned are overwritten; everything else keeps its
    prior local value (or stays unset). Tri-state flags take the raw remote
    value unconditionally; deciding whether it equals the default is left to
    :func:`compute_drift`. Macros come from their own endpoint and are not
    decoded here.
    """
    result = dict(prior or {})

    for spec in specs:
        if spec.kind is FieldKind.MACROS:
            continue

        present, raw = _read_raw(spec, wire)
        if not present:
            continue

        if spec.kind is FieldKind.TRISTATE:
            result[spec.name] = TriState.parse(raw)
        elif spec.kind in (FieldKind.REQUIRED, FieldKind.BOOLEAN):
            if raw is not None:
                result[spec.name] = raw
        elif spec.kind is FieldKind.LIST:
            if raw is None:
                result[spec.name] = None
            elif spec.py_type is int:
                result[spec.name] = ref_ids(raw)
            else:
                result[spec.name] = list(raw)
        else:
            result[spec.name] = raw

    return result


def _macro_key(macro: Any) -> Tuple[Any, ...]:
    data = macro.model_dump() if hasattr(macro, "model_dump") else dict(macro)
    return (
        data.get("name"),
        data.get("value"),
        bool(data.get("is_password", False)),
        data.get("description"),
    )


def _macros_drift(desired: List[Any], actual: Optional[List[Any]]) -> bool:
    actual_by_name = {_macro_key(m)[0]: _macro_key(m) for m in actual or []}
    desired_keys = [_macro_key(m) for m in desired]

    if {k[0] for k in desired_keys} != set(actual_by_name):
        return True

    for name, value, is_password, description in desired_keys:
        _, actual_value, actual_password, actual_description = actual_by_name[name]
        if is_password != actual_password or description != actual_description:
            return True
        # Secret values are never echoed back; they cannot be compared.
        if actual_value is not None and value != actual_value:
            return True
    return False


def compute_drift(
    desired: Any,
    actual: Any,
    specs: Tuple[FieldSpec, ...] = HOST_FIELDS,
) -> Dict[str, Tuple[Any, Any]]:
    """Return ``{field: (actual, desired)}`` for every field that would change.

    Fields left unset in the desired state, and tri-states set to DEFAULT or
    UNSET, are never reported: an update would not send them.
    """
    drift = {}

    for spec in specs:
        want = getattr(desired, spec.name, None)
        have = getattr(actual, spec.name, None)

        if spec.kind is FieldKind.TRISTATE:
            want = TriState.parse(want)
            have = TriState.parse(have)
            if want.is_explicit and want != have:
                drift[spec.name] = (have.to_raw(), want.to_raw())
        elif spec.kind is FieldKind.MACROS:
            if want and _macros_drift(want, have):
                drift[spec.name] = (
                    [_macro_key(m)[0] for m in have or []],
                    [_macro_key(m)[0] for m in want],
                )
        elif spec.kind is FieldKind.LIST:
            if not want:
                continue
            if spec.py_type is int:
                changed = sorted(want) != sorted(have or [])
            else:
                changed = list(want) != list(have or [])
            if changed:
                drift[spec.name] = (have, want)
        elif spec.kind in (FieldKind.REQUIRED, FieldKind.BOOLEAN):
            if want != have:
                drift[spec.name] = (have, want)
        else:
            if want is not None and want != have:
                drift[spec.name] = (have, want)

    return drift
