"""Base interface for module scanners.

Scanners extract the modules compiled into a binary, either from the
binary itself or from a text dump of its module information.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from modlicense.models import Module


class BaseScanner(ABC):
    """Abstract base class for module scanners.

    Attributes:
        source_path: Path to the file being scanned.
    """

    def __init__(self, source_path: Path) -> None:
        """Initialize the scanner.

        Args:
            source_path: Path to the binary or module info file.
        """
        self.source_path = source_path

    @abstractmethod
    def scan(self) -> list[Module]:
        """Scan the source and extract the dependency modules.

        Returns:
            List of Module objects, in the order they were recorded.

        Raises:
            ScanError: If the source cannot be read or has no module info.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file."""
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's source type."""
        ...
