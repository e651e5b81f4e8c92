"""Scanner for Go module information text.

The Go toolchain records the modules used to build a binary as
tab-separated lines::

    path    example.com/cmd/tool
    mod     example.com/cmd/tool    (devel)
    dep     github.com/pkg/errors   v0.9.1  h1:FEBLx1zS214owpjy7qsBeixbURkuhQAwrK5UwLGTwt4=
    =>      github.com/fork/errors  v0.9.2  h1:...

The same format is printed, indented, by ``go version -m <binary>``.
"""

import logging
from pathlib import Path

from modlicense.exceptions import ScanError
from modlicense.models import Module
from modlicense.scanners.base import BaseScanner

logger = logging.getLogger(__name__)


def parse_modinfo(data: str) -> list[Module]:
    """Parse Go module information into dependency modules.

    A ``=>`` line replaces the dependency immediately before it. The main
    module (``mod``) and other lines are ignored.

    Args:
        data: Module information text.

    Returns:
        List of dependency modules.

    Raises:
        ScanError: If a replacement line has no dependency to replace.
    """
    modules: list[Module] = []
    for line_num, line in enumerate(data.splitlines(), start=1):
        fields = line.strip().split("\t")
        kind = fields[0]
        if kind not in ("dep", "=>"):
            continue

        if len(fields) < 3:
            logger.debug("Skipping short module line %d: %r", line_num, line)
            continue

        module = Module(
            path=fields[1],
            version=fields[2],
            hash=fields[3] if len(fields) > 3 else "",
        )
        if kind == "dep":
            modules.append(module)
            continue

        if not modules:
            raise ScanError(f"Replacement without a dependency on line {line_num}")
        modules[-1] = module

    return modules


class ModInfoScanner(BaseScanner):
    """Scanner for text files holding Go module information."""

    EXTENSIONS = (".txt", ".modinfo")

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        return path.suffix.lower() in cls.EXTENSIONS

    @property
    def source_name(self) -> str:
        return "modinfo"

    def scan(self) -> list[Module]:
        try:
            data = self.source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ScanError(f"Error reading {self.source_path}: {e}") from e

        return parse_modinfo(data)
