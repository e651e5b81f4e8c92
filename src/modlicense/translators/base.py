"""Base interface for module translators.

Translators rewrite a module's path to one that a finder is more likely to
recognize, such as the upstream repository of a vanity import path.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from modlicense.models import Module

logger = logging.getLogger(__name__)


class BaseTranslator(ABC):
    """Abstract base class for module translators.

    Translators never fail: a translator that cannot rewrite a module,
    for whatever reason, returns None and the module passes through.
    """

    @abstractmethod
    async def translate(self, module: Module) -> Optional[Module]:
        """Rewrite a module.

        Args:
            module: Module to rewrite.

        Returns:
            The rewritten module, or None if this translator does not apply.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the translator."""


async def translate(module: Module, translators: list[BaseTranslator]) -> Module:
    """Apply every translator in order.

    Each translator sees the output of the previous one. Translators that
    do not apply leave the module unchanged.

    Args:
        module: Module to rewrite.
        translators: Translators in configured order.

    Returns:
        The rewritten module (possibly the original).
    """
    for translator in translators:
        result = await translator.translate(module)
        if result is not None and result != module:
            logger.debug("%s translated %s to %s", type(translator).__name__, module, result)
            module = result
    return module
