"""Configuration file loading for modlicense.

The configuration file is YAML (plain JSON is accepted too) with four
optional keys::

    allow: [MIT, Apache-2.0]
    deny: [GPL-3.0-only]
    override:
      github.com/foo/bar: MIT
    translate:
      gopkg.in/foo/bar.v2: github.com/foo/bar
      "/^example\\.com/(.*)$/": github.com/example/$1
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from modlicense.exceptions import ConfigurationError
from modlicense.models import LicenseRecord


class LicenseState(str, Enum):
    """Whether a license is permitted by the configuration."""

    ALLOWED = "allowed"
    DENIED = "denied"
    UNKNOWN = "unknown"


class Config(BaseModel):
    """Validated configuration."""

    model_config = {"extra": "forbid"}

    allow: list[str] = Field(
        default_factory=list,
        description="Allowed license names or SPDX identifiers.",
    )
    deny: list[str] = Field(
        default_factory=list,
        description="Denied license names or SPDX identifiers.",
    )
    override: dict[str, str] = Field(
        default_factory=dict,
        description="License to use for an exact module path.",
    )
    translate: dict[str, str] = Field(
        default_factory=dict,
        description="Module path rewrites; /regex/ keys are patterns.",
    )

    def license_state(self, record: Optional[LicenseRecord]) -> LicenseState:
        """Classify a license against the allow and deny lists.

        A license matches a list entry by SPDX identifier or by name. Deny
        wins over allow.

        Args:
            record: Resolved license, or None.

        Returns:
            The LicenseState of the license.
        """
        if record is None:
            return LicenseState.UNKNOWN

        keys = {record.name}
        if record.spdx:
            keys.add(record.spdx)

        if keys & set(self.deny):
            return LicenseState.DENIED
        if keys & set(self.allow):
            return LicenseState.ALLOWED
        return LicenseState.UNKNOWN


def load_config(path: Path) -> Config:
    """Load and validate a configuration file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated Config instance. An empty file yields the defaults.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            or fails validation.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is None:
        return Config()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
            messages.append(f"{loc}: {err['msg']}")
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {'; '.join(messages)}"
        ) from e
