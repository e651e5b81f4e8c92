"""Base interface for license finders.

Finders look up the license of a module from one source, such as the
configured overrides or a source hosting API. They are chained in priority
order by :func:`find_license`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from modlicense.exceptions import LicenseLookupError
from modlicense.models import LicenseRecord, Module, StatusType

logger = logging.getLogger(__name__)

StatusListener = Callable[[StatusType, str], None]


class BaseFinder(ABC):
    """Abstract base class for license finders.

    A finder has three outcomes: it returns a LicenseRecord (found), returns
    None (not found), or raises LicenseLookupError (the lookup failed).
    """

    @abstractmethod
    async def find(
        self, module: Module, listener: Optional[StatusListener] = None
    ) -> Optional[LicenseRecord]:
        """Find the license of a module.

        Args:
            module: Module to look up.
            listener: Optional callback receiving progress messages.

        Returns:
            The module's LicenseRecord, or None if this source has none.

        Raises:
            LicenseLookupError: If the source could not be queried.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the finder name for logging/debugging."""
        ...

    async def close(self) -> None:
        """Release any resources held by the finder."""


async def find_license(
    module: Module,
    finders: list[BaseFinder],
    listener: Optional[StatusListener] = None,
) -> tuple[Optional[LicenseRecord], Optional[Exception]]:
    """Find a module's license by trying each finder in order.

    The first finder that returns a record wins and no further finders are
    called. A failing finder does not stop the chain; its error is kept and
    returned only if no later finder produces a record.

    Args:
        module: Module to look up.
        finders: Finders in priority order.
        listener: Optional callback receiving progress messages.

    Returns:
        Tuple of (record or None, last error or None).
    """
    error: Optional[Exception] = None
    for finder in finders:
        try:
            record = await finder.find(module, listener)
        except LicenseLookupError as e:
            logger.debug("%s lookup failed for %s: %s", finder.name, module, e)
            error = e
            continue

        if record is not None:
            logger.debug("%s found %s for %s", finder.name, record, module)
            return record, None

    return None, error
