"""Module scanners for Go binaries and module information dumps.

This module provides scanners for extracting the dependency modules that
were compiled into a binary.
"""

from pathlib import Path

from modlicense.scanners.base import BaseScanner
from modlicense.scanners.binary import BinaryScanner
from modlicense.scanners.modinfo import ModInfoScanner, parse_modinfo

__all__ = [
    "BaseScanner",
    "BinaryScanner",
    "ModInfoScanner",
    "get_scanner",
    "parse_modinfo",
]

# Registry of available scanners in priority order
_SCANNERS: list[type[BaseScanner]] = [
    ModInfoScanner,
    BinaryScanner,
]


def get_scanner(path: Path) -> BaseScanner:
    """Get the appropriate scanner for a given file path.

    Args:
        path: Path to a binary or module information file.

    Returns:
        Scanner instance configured for the given file.

    Raises:
        ValueError: If no scanner can handle the given file.
    """
    for scanner_cls in _SCANNERS:
        if scanner_cls.can_handle(path):
            return scanner_cls(path)

    raise ValueError(f"No scanner available for '{path.name}'")
