"""XML parsing for documents stored inside the package.

ElementTree expands prefixed names to '{uri}local'. JCR documents are
checked against prefixed names such as 'cq:template', so the prefixes
declared in the document are collected while parsing and used to turn
expanded names back into their 'prefix:local' form.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from pkgcheck.validator.archive import ArchiveEntry
from pkgcheck.validator.errors import MarkupError

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def local_name(tag: str) -> str:
    """Strip a '{namespace-uri}' prefix from an ElementTree tag."""
    return tag.rsplit("}", 1)[-1]


@dataclass
class XmlDocument:
    root: ET.Element
    prefixes: dict[str, str] = field(default_factory=dict)

    def qname(self, name: str) -> str:
        """Return 'prefix:local' for an expanded '{uri}local' name."""
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        prefix = self.prefixes.get(uri)
        if prefix is None and uri == XML_NAMESPACE:
            prefix = "xml"
        return f"{prefix}:{local}" if prefix else local


def parse_entry(entry: ArchiveEntry) -> XmlDocument:
    """Parse an archive entry as XML. Raises MarkupError on any failure."""
    if not entry.data.strip():
        raise MarkupError(f"{entry.path} is empty")

    prefixes: dict[str, str] = {}
    root: ET.Element | None = None
    try:
        for event, item in ET.iterparse(io.BytesIO(entry.data), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                prefixes.setdefault(uri, prefix)
            elif root is None:
                root = item
    except ET.ParseError as e:
        raise MarkupError(f"{entry.path}: {e}") from e

    if root is None:
        raise MarkupError(f"{entry.path} has no root element")
    return XmlDocument(root=root, prefixes=prefixes)
