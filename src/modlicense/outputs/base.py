"""Base interface for resolution outputs.

Outputs receive lifecycle events for every module while licenses are
resolved. Events for different modules arrive in completion order.
"""

from abc import ABC, abstractmethod
from typing import Optional

from modlicense.models import LicenseRecord, Module, StatusType


class BaseOutput(ABC):
    """Abstract base class for resolution outputs."""

    @abstractmethod
    def start(self, module: Module) -> None:
        """Called when resolution of a module begins."""
        ...

    def update(self, module: Module, status: StatusType, message: str) -> None:
        """Called with progress messages while a module is being resolved."""

    @abstractmethod
    def finish(
        self,
        module: Module,
        license: Optional[LicenseRecord],
        error: Optional[Exception],
    ) -> None:
        """Called once with the final outcome of a module.

        Args:
            module: The resolved module.
            license: Resolved license, or None if none was found.
            error: Lookup error when no license was found, if any.
        """
        ...

    def close(self) -> None:
        """Called after every module has finished."""


class MultiOutput(BaseOutput):
    """Output that forwards every event to several outputs."""

    def __init__(self, outputs: Optional[list[BaseOutput]] = None) -> None:
        self.outputs = list(outputs or [])

    def start(self, module: Module) -> None:
        for output in self.outputs:
            output.start(module)

    def update(self, module: Module, status: StatusType, message: str) -> None:
        for output in self.outputs:
            output.update(module, status, message)

    def finish(
        self,
        module: Module,
        license: Optional[LicenseRecord],
        error: Optional[Exception],
    ) -> None:
        for output in self.outputs:
            output.finish(module, license, error)

    def close(self) -> None:
        for output in self.outputs:
            output.close()
