"""Resource lifecycle base classes, diagnostics and operation results."""

import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..api_client import CentreonClient
from ..diagnostics import Diagnostic, Severity
from ..errors import (
    CentreonAPIError,
    CentreonError,
    CentreonTransportError,
    ConfigurationReloadError,
    HostValidationError,
    ResourceNotFoundError,
)
from ..logging_utils import bind_log_fields, get_subsystem_logger


class OperationResult(BaseModel):
    """Outcome of one lifecycle operation, as handed back to the caller.

    ``state`` is meaningful when ``success`` is true, and after a failed
    configuration reload, where it holds the state that was applied anyway.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    operation: str = Field(description="Lifecycle operation name")
    success: bool = Field(description="Whether the operation completed without errors")
    state: Optional[Any] = Field(None, description="New tracked state; None means absent")
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    execution_time_ms: Optional[float] = Field(None, description="Operation execution time in milliseconds")
    timestamp: datetime = Field(default_factory=datetime.now, description="When operation was performed")

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]


class BaseResource(ABC):
    """Create/Read/Update/Delete lifecycle driven by the provider host.

    Subclasses implement the four operations and raise on failure;
    :meth:`execute` turns those exceptions into diagnostics.
    """

    type_suffix: str = ""
    display_name: str = "resource"

    def __init__(self, client: CentreonClient):
        self.client = client
        self.logger = get_subsystem_logger(self.__class__.__module__)

    def type_name(self, provider_type_name: str) -> str:
        return provider_type_name + self.type_suffix

    @abstractmethod
    def create(self, plan: Any) -> Any:
        """Create the resource and return its new state."""

    @abstractmethod
    def read(self, state: Any) -> Optional[Any]:
        """Refresh the state; None means the resource no longer exists."""

    @abstractmethod
    def update(self, plan: Any, state: Any) -> Any:
        """Apply the plan to an existing resource and return the new state."""

    @abstractmethod
    def delete(self, state: Any) -> None:
        """Delete the resource; deleting an absent resource succeeds."""

    def _after_mutation(self, operation: str, resource_name: str, state: Any = None) -> None:
        """Trigger the configuration reload when auto-reload is enabled."""
        if not self.client.config.auto_reload:
            return

        self.logger.debug(f"Auto-reload enabled, reloading configuration after {operation}")
        try:
            self.client.generate_and_reload_configuration()
        except CentreonError as e:
            self.logger.error(f"Configuration reload after {operation} of '{resource_name}' failed: {e}")
            raise ConfigurationReloadError(operation, resource_name, cause=e, state=state) from e

    def execute(self, operation: str, *args: Any) -> OperationResult:
        """Run a lifecycle operation and report the outcome as diagnostics."""
        handler: Callable[..., Any] = getattr(self, operation)
        start_time = time.monotonic()
        title = f"{operation.capitalize()} {self.display_name}"

        with bind_log_fields(operation=operation, resource=self.display_name):
            try:
                state = handler(*args)
                diagnostics: List[Diagnostic] = []
                success = True
            except HostValidationError as e:
                state, diagnostics, success = None, list(e.diagnostics), False
            except ConfigurationReloadError as e:
                # The change itself went through; keep the applied state.
                state, success = e.state, False
                diagnostics = [Diagnostic.error(f"Error reloading configuration after {operation}", str(e))]
            except ResourceNotFoundError as e:
                state, success = None, False
                diagnostics = [Diagnostic.error(f"{title} failed", str(e))]
            except (CentreonAPIError, CentreonTransportError) as e:
                state, success = None, False
                diagnostics = [Diagnostic.error(f"Error during {operation} of {self.display_name}", str(e))]
            except ValueError as e:
                # Includes pydantic.ValidationError raised while decoding a remote object.
                state, success = None, False
                diagnostics = [Diagnostic.error(f"Invalid response during {operation} of {self.display_name}", str(e))]

        execution_time = (time.monotonic() - start_time) * 1000
        self.logger.debug(f"{title} finished in {execution_time:.2f}ms (success={success})")

        return OperationResult(
            operation=operation,
            success=success,
            state=state,
            diagnostics=diagnostics,
            execution_time_ms=execution_time,
        )


class BaseDataSource(ABC):
    """Read-only lookup exposed by the provider."""

    type_suffix: str = ""

    def __init__(self, client: CentreonClient):
        self.client = client
        self.logger = get_subsystem_logger(self.__class__.__module__)

    def type_name(self, provider_type_name: str) -> str:
        return provider_type_name + self.type_suffix

    @abstractmethod
    def read(self, **arguments: Any) -> Dict[str, Any]:
        """Fetch the data source's current value."""
