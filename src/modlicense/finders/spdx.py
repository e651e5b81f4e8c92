"""SPDX identifiers and license names.

Based on https://spdx.org/licenses/
"""

from typing import Optional

from modlicense.models import LicenseRecord

SPDX_NAMES = {
    "MIT": "MIT License",
    "Apache-2.0": "Apache License 2.0",
    "GPL-3.0-only": "GNU General Public License v3.0 only",
    "GPL-3.0-or-later": "GNU General Public License v3.0 or later",
    "GPL-2.0-only": "GNU General Public License v2.0 only",
    "GPL-2.0-or-later": "GNU General Public License v2.0 or later",
    "LGPL-3.0-only": "GNU Lesser General Public License v3.0 only",
    "LGPL-3.0-or-later": "GNU Lesser General Public License v3.0 or later",
    "LGPL-2.1-only": "GNU Lesser General Public License v2.1 only",
    "LGPL-2.1-or-later": "GNU Lesser General Public License v2.1 or later",
    "BSD-3-Clause": 'BSD 3-Clause "New" or "Revised" License',
    "BSD-2-Clause": 'BSD 2-Clause "Simplified" License',
    "ISC": "ISC License",
    "MPL-2.0": "Mozilla Public License 2.0",
    "EPL-2.0": "Eclipse Public License 2.0",
    "AGPL-3.0-only": "GNU Affero General Public License v3.0 only",
    "AGPL-3.0-or-later": "GNU Affero General Public License v3.0 or later",
    "CC0-1.0": "Creative Commons Zero v1.0 Universal",
    "Unlicense": "The Unlicense",
    "WTFPL": "Do What The F*ck You Want To Public License",
}

_SPDX_BY_NAME = {name.lower(): spdx_id for spdx_id, name in SPDX_NAMES.items()}


def license_record(value: str) -> LicenseRecord:
    """Build a LicenseRecord from an SPDX identifier or a license name.

    Known identifiers and names are completed with their counterpart;
    anything else becomes a record with only a name.

    Args:
        value: SPDX identifier (e.g., "MIT") or name (e.g., "MIT License").

    Returns:
        The corresponding LicenseRecord.
    """
    value = value.strip()
    if value in SPDX_NAMES:
        return LicenseRecord(name=SPDX_NAMES[value], spdx=value)

    spdx_id: Optional[str] = _SPDX_BY_NAME.get(value.lower())
    return LicenseRecord(name=value, spdx=spdx_id)
