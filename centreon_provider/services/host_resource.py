"""Host resource: reconciles a desired HostSpec with the remote host."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from ..diagnostics import has_errors
from ..errors import HostValidationError, ResourceNotFoundError
from ..fields import SparseFieldMap, compute_drift
from ..logging_utils import bind_log_fields
from ..models.hosts import HostSpec, Macro
from ..validators import validate_host
from .base import BaseResource


class HostPlan(BaseModel):
    """What applying a desired host would do, without doing it."""

    action: str = Field(description="create, update or none")
    name: str = Field(description="Host name")
    host_id: Optional[int] = Field(None, description="Remote ID when the host exists")
    changes: Dict[str, Tuple[Any, Any]] = Field(
        default_factory=dict, description="field -> (current, desired)"
    )


def merge_macros(remote: List[Dict[str, Any]], prior: Optional[List[Macro]]) -> List[Macro]:
    """Decode remote macros, filling withheld password values from prior state."""
    prior_secrets = {m.name: m.value for m in prior or [] if m.is_password}
    macros = []
    for item in remote:
        macro = Macro(**item)
        if macro.is_password and macro.value is None:
            macro = macro.model_copy(update={"value": prior_secrets.get(macro.name)})
        macros.append(macro)
    return macros


class HostResource(BaseResource):
    """Lifecycle of a ``centreon_host``.

    Hosts are addressed by name only: every read, update and delete
    re-resolves the name to the remote ID, nothing is cached.
    """

    type_suffix = "_host"
    display_name = "host"

    def _validate(self, plan: HostSpec) -> None:
        diagnostics = validate_host(plan)
        if has_errors(diagnostics):
            raise HostValidationError(diagnostics)

    def _lookup(self, name: str) -> Optional[Dict[str, Any]]:
        return self.client.find_host_by_name(name)

    def _read_remote(self, name: str, prior: Optional[HostSpec]) -> Optional[Tuple[int, HostSpec]]:
        wire = self._lookup(name)
        if wire is None:
            return None

        host_id = wire["id"]
        prior_macros = prior.macros if prior is not None else None
        macros = merge_macros(self.client.get_host_macros(host_id), prior_macros)
        return host_id, HostSpec.from_wire(wire, prior=prior, macros=macros)

    def create(self, plan: HostSpec) -> HostSpec:
        self._validate(plan)
        fields = SparseFieldMap.from_model(plan)

        with bind_log_fields(host=plan.name):
            self.logger.info("Creating host", fields={"sent_fields": len(fields)})
            self.client.create_host(fields.to_payload())
            self._after_mutation("create", plan.name, state=plan)

        return plan

    def read(self, state: HostSpec) -> Optional[HostSpec]:
        with bind_log_fields(host=state.name):
            found = self._read_remote(state.name, state)
            if found is None:
                self.logger.warning("Host no longer exists remotely, removing it from state")
                return None

            host_id, current = found
            self.logger.debug("Read host", fields={"host_id": host_id})
            return current

    def update(self, plan: HostSpec, state: Optional[HostSpec] = None) -> HostSpec:
        self._validate(plan)
        # A rename is applied to the host known under its previous name.
        name = state.name if state is not None else plan.name

        with bind_log_fields(host=name):
            wire = self._lookup(name)
            if wire is None:
                raise ResourceNotFoundError("Host", name, operation="update")

            fields = SparseFieldMap.from_model(plan)
            self.logger.info(
                "Updating host",
                fields={"host_id": wire["id"], "sent_fields": len(fields)},
            )
            self.client.update_host(wire["id"], fields.to_payload())
            self._after_mutation("update", plan.name, state=plan)

        return plan

    def delete(self, state: HostSpec) -> None:
        with bind_log_fields(host=state.name):
            wire = self._lookup(state.name)
            if wire is None:
                self.logger.info("Host already absent, nothing to delete")
                return None

            self.logger.info("Deleting host", fields={"host_id": wire["id"]})
            self.client.delete_host(wire["id"])
            self._after_mutation("delete", state.name)

        return None

    def plan(self, plan: HostSpec) -> HostPlan:
        """Compare the desired host with the remote one, changing nothing."""
        self._validate(plan)

        with bind_log_fields(host=plan.name):
            found = self._read_remote(plan.name, plan)
            if found is None:
                return HostPlan(action="create", name=plan.name)

            host_id, current = found
            changes = compute_drift(plan, current)
            self.logger.debug("Computed drift", fields={"changed_fields": len(changes)})
            return HostPlan(
                action="update" if changes else "none",
                name=plan.name,
                host_id=host_id,
                changes=changes,
            )
