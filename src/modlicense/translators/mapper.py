"""Translator driven by the configured ``translate`` mapping."""

import dataclasses
import re
from typing import Optional

from modlicense.exceptions import ConfigurationError
from modlicense.models import Module
from modlicense.translators.base import BaseTranslator

_GROUP_REF = re.compile(r"\$(\d+)")


class MapTranslator(BaseTranslator):
    """Rewrite module paths using an explicit mapping.

    Keys are exact module paths, or regular expressions when wrapped in
    slashes (``/^gopkg\\.in/(.*)$/``). Pattern replacements may refer to
    groups as ``$1``. Exact keys are checked before patterns.
    """

    def __init__(self, mapping: Optional[dict[str, str]] = None) -> None:
        """Initialize the translator.

        Args:
            mapping: Module path rewrites in configured order.

        Raises:
            ConfigurationError: If a pattern key is not a valid regex, or its
                replacement refers to a group the pattern does not have.
        """
        self.exact: dict[str, str] = {}
        self.patterns: list[tuple[re.Pattern, str]] = []

        for key, value in (mapping or {}).items():
            if len(key) > 2 and key.startswith("/") and key.endswith("/"):
                try:
                    pattern = re.compile(key[1:-1])
                except re.error as e:
                    raise ConfigurationError(
                        f"Invalid translate pattern {key!r}: {e}"
                    ) from e
                self.patterns.append((pattern, _replacement(key, pattern, value)))
            else:
                self.exact[key] = value

    async def translate(self, module: Module) -> Optional[Module]:
        path = self.exact.get(module.path)
        if path is None:
            for pattern, replacement in self.patterns:
                if pattern.search(module.path):
                    path = pattern.sub(replacement, module.path)
                    break

        if path is None:
            return None
        return dataclasses.replace(module, path=path)


def _replacement(key: str, pattern: re.Pattern, value: str) -> str:
    """Convert a ``$N`` replacement into a template for ``pattern.sub``.

    Raises:
        ConfigurationError: If ``value`` refers to a missing group.
    """
    for ref in _GROUP_REF.findall(value):
        if int(ref) > pattern.groups:
            raise ConfigurationError(
                f"Invalid translate replacement {value!r} for {key!r}: "
                f"pattern has {pattern.groups} group(s), ${ref} requested"
            )
    # Backslashes are literal in replacements; only $N is special.
    return _GROUP_REF.sub(r"\\g<\1>", value.replace("\\", "\\\\"))
