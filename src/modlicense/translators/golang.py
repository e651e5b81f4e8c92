"""Translator for the Go project's ``golang.org/x`` repositories."""

import dataclasses
from typing import Optional

from modlicense.models import Module
from modlicense.translators.base import BaseTranslator


class GolangTranslator(BaseTranslator):
    """Rewrite ``golang.org/x/<name>`` to its GitHub mirror ``github.com/golang/<name>``."""

    PREFIX = "golang.org/x/"

    async def translate(self, module: Module) -> Optional[Module]:
        if not module.path.startswith(self.PREFIX):
            return None

        rest = module.path[len(self.PREFIX):]
        if not rest:
            return None
        return dataclasses.replace(module, path="github.com/golang/" + rest)
