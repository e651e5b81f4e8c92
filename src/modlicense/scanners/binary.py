"""Scanner for compiled Go binaries.

The Go linker embeds the module information string in the binary, framed
by two fixed 16-byte sentinels. This scanner locates that frame directly in
the file contents, which works for every executable format Go produces.
"""

import logging
from pathlib import Path

from modlicense.exceptions import ScanError
from modlicense.models import Module
from modlicense.scanners.base import BaseScanner
from modlicense.scanners.modinfo import parse_modinfo

logger = logging.getLogger(__name__)

INFO_START = bytes.fromhex("3077af0c9274080241e1c107e6d618e6")
INFO_END = bytes.fromhex("f932433186182072008242104116d8f2")


def extract_modinfo(data: bytes) -> str:
    """Return the module information embedded in a binary.

    Args:
        data: Raw binary contents.

    Returns:
        The module information text, or "" if the binary has none.
    """
    end = data.find(INFO_END)
    while end != -1:
        start = data.rfind(INFO_START, 0, end)
        if start != -1:
            body = data[start + len(INFO_START):end]
            # The framed string always ends with a newline; anything else is
            # a chance occurrence of the sentinel bytes.
            if body.endswith(b"\n"):
                return body.decode("utf-8", errors="replace")
        end = data.find(INFO_END, end + 1)

    return ""


class BinaryScanner(BaseScanner):
    """Scanner that reads module information from a compiled Go binary."""

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        return True

    @property
    def source_name(self) -> str:
        return "go binary"

    def scan(self) -> list[Module]:
        try:
            data = self.source_path.read_bytes()
        except OSError as e:
            raise ScanError(f"Error reading {self.source_path}: {e}") from e

        modinfo = extract_modinfo(data)
        if not modinfo:
            raise ScanError(
                f"{self.source_path} was compiled without Go modules "
                f"or has zero dependencies"
            )

        modules = parse_modinfo(modinfo)
        logger.debug("Found %d modules in %s", len(modules), self.source_path)
        return modules
