"""Shared test fixtures and configuration."""

import io
import os
import sys
import zipfile
from pathlib import Path
from typing import Callable

# Add aem_pkgcheck/ to Python path so `from pkgcheck.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "aem_pkgcheck"))

import pytest

os.environ["PKGCHECK_DEV_MODE"] = "true"
os.environ["PKGCHECK_OPTIONS_PATH"] = str(Path(__file__).parent / "no-options.json")

PACKAGE_NAME = "acme-content-20240101-1.zip"

FILTER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<workspaceFilter version="1.0">
    <filter root="{root}"/>
</workspaceFilter>
"""

PROPERTIES_XML = """<?xml version="1.0" encoding="utf-8" standalone="no"?>
<!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">
<properties>
<comment>FileVault Package Properties</comment>
<entry key="name">acme-content</entry>
<entry key="group">acme</entry>
<entry key="version">1.0.0</entry>
</properties>
"""


def build_zip(entries: dict[str, str | bytes | None]) -> bytes:
    """Build a zip in memory. A None value stores a directory entry."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for path, content in entries.items():
            if content is None:
                zf.writestr(zipfile.ZipInfo(path if path.endswith("/") else path + "/"), b"")
            else:
                zf.writestr(path, content)
    return buf.getvalue()


@pytest.fixture
def package_name() -> str:
    return PACKAGE_NAME


@pytest.fixture
def base_entries() -> dict[str, str | bytes | None]:
    """A conforming 'acme' package with an empty content tree."""
    return {
        "META-INF/": None,
        "META-INF/vault/": None,
        "META-INF/vault/filter.xml": FILTER_XML.format(root="/content/acme"),
        "META-INF/vault/properties.xml": PROPERTIES_XML,
        "jcr_root/": None,
    }


@pytest.fixture
def make_package() -> Callable[[dict[str, str | bytes | None]], bytes]:
    return build_zip


@pytest.fixture
def filter_xml() -> Callable[..., str]:
    def _build(*roots: str) -> str:
        body = "".join(f'    <filter root="{r}"/>\n' for r in roots)
        return f'<?xml version="1.0" encoding="UTF-8"?>\n<workspaceFilter version="1.0">\n{body}</workspaceFilter>\n'
    return _build
