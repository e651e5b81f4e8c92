"""Translator for gopkg.in versioned import paths."""

import dataclasses
import re
from typing import Optional

from modlicense.models import Module
from modlicense.translators.base import BaseTranslator


class GopkgTranslator(BaseTranslator):
    """Rewrite gopkg.in paths to the GitHub repository they redirect to.

    - ``gopkg.in/pkg.v3`` -> ``github.com/go-pkg/pkg``
    - ``gopkg.in/user/pkg.v3`` -> ``github.com/user/pkg``
    """

    PATTERN = re.compile(
        r"^gopkg\.in/"
        r"(?:(?P<user>[a-zA-Z0-9][-a-zA-Z0-9_]*)/)?"
        r"(?P<pkg>[a-zA-Z][-.a-zA-Z0-9_]*?)"
        r"\.v\d+(?:-unstable)?"
        r"(?:/.*)?$"
    )

    async def translate(self, module: Module) -> Optional[Module]:
        match = self.PATTERN.match(module.path)
        if not match:
            return None

        pkg = match.group("pkg")
        user = match.group("user") or f"go-{pkg}"
        return dataclasses.replace(module, path=f"github.com/{user}/{pkg}")
