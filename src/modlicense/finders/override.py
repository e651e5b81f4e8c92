"""Finder for licenses set explicitly in the configuration."""

from typing import Optional

from modlicense.finders.base import BaseFinder, StatusListener
from modlicense.finders.spdx import license_record
from modlicense.models import LicenseRecord, Module


class OverrideFinder(BaseFinder):
    """Finder that returns the configured license for an exact module path.

    Always placed first in the chain so that an operator's override is
    never second-guessed by a remote source.

    Attributes:
        overrides: Mapping of module path to license identifier or name.
    """

    def __init__(self, overrides: Optional[dict[str, str]] = None) -> None:
        self.overrides = dict(overrides or {})

    @property
    def name(self) -> str:
        return "Override"

    async def find(
        self, module: Module, listener: Optional[StatusListener] = None
    ) -> Optional[LicenseRecord]:
        value = self.overrides.get(module.path)
        if value is None:
            return None
        return license_record(value)
