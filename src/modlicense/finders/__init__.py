"""License finders for looking up module licenses from various sources.

This module provides finders for the configured overrides and for the
GitHub license API, plus the chain that tries them in order.
"""

from modlicense.finders.base import BaseFinder, StatusListener, find_license
from modlicense.finders.github import GitHubFinder
from modlicense.finders.http import HttpFinder
from modlicense.finders.override import OverrideFinder
from modlicense.finders.spdx import SPDX_NAMES, license_record

__all__ = [
    "BaseFinder",
    "GitHubFinder",
    "HttpFinder",
    "OverrideFinder",
    "SPDX_NAMES",
    "StatusListener",
    "find_license",
    "license_record",
]
