"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from modlicense.models import LicenseRecord, Module


@pytest.fixture
def module() -> Module:
    """Return a GitHub-hosted module."""
    return Module(path="github.com/x/a", version="v1.0.0", hash="h1")


@pytest.fixture
def mit_license() -> LicenseRecord:
    """Return an MIT license record."""
    return LicenseRecord(name="MIT", spdx="MIT")


@pytest.fixture
def sample_github_license_response() -> dict[str, Any]:
    """Return a GitHub repository license API response."""
    return {
        "name": "LICENSE",
        "path": "LICENSE",
        "html_url": "https://github.com/pkg/errors/blob/master/LICENSE",
        "license": {
            "key": "bsd-2-clause",
            "name": 'BSD 2-Clause "Simplified" License',
            "spdx_id": "BSD-2-Clause",
        },
    }


@pytest.fixture
def modinfo_text() -> str:
    """Return module info as embedded in a Go binary."""
    return (
        "path\texample.com/cmd/tool\n"
        "mod\texample.com/cmd/tool\t(devel)\t\n"
        "dep\tgithub.com/pkg/errors\tv0.9.1\th1:FEBLx1zS214owpjy7qsBeixbURkuhQAwrK5UwLGTwt4=\n"
        "dep\tgolang.org/x/sys\tv0.1.0\th1:kunALQeHf1/185U1i0GOB/fy1IPRDDpuoOOqRReG57U=\n"
        "dep\tgopkg.in/yaml.v2\tv2.4.0\th1:D8xgwECY7CYvx+Y2n4sBz93Jn9JRvxdiyyo8CTfuKaY=\n"
        "=>\tgithub.com/fork/yaml\tv2.4.1\th1:replaced=\n"
    )
