"""Module translators that rewrite import paths to improve license lookups."""

from typing import Optional

from modlicense.translators.base import BaseTranslator, translate
from modlicense.translators.golang import GolangTranslator
from modlicense.translators.gopkg import GopkgTranslator
from modlicense.translators.mapper import MapTranslator
from modlicense.translators.resolver import ResolverTranslator

__all__ = [
    "BaseTranslator",
    "GolangTranslator",
    "GopkgTranslator",
    "MapTranslator",
    "ResolverTranslator",
    "default_translators",
    "translate",
]


def default_translators(
    mapping: Optional[dict[str, str]] = None,
) -> list[BaseTranslator]:
    """Build the translator chain in its standard order.

    Args:
        mapping: The configured ``translate`` mapping.

    Returns:
        Translators with the configured mapping first.

    Raises:
        ConfigurationError: If the mapping is invalid.
    """
    return [
        MapTranslator(mapping),
        ResolverTranslator(),
        GolangTranslator(),
        GopkgTranslator(),
    ]
