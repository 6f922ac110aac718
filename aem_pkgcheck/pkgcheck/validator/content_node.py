"""Content descriptor trees: a tagged variant built from .content.xml.

A descriptor becomes a NodeMap keyed by the root element's name. Each
element maps to a NodeMap holding its attributes (as NodeScalar, or
NodeList for JCR multi-value properties) followed by its child elements
grouped by name into NodeList values.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, Union

from pkgcheck.validator.markup import XmlDocument

# Leading JCR type hint, e.g. {Boolean}true or {Name}[mix:versionable]
_TYPE_HINT_RE = re.compile(r"^\{[A-Za-z]+\}")
# Comma not preceded by a backslash
_MULTI_VALUE_SPLIT_RE = re.compile(r"(?<!\\),")


@dataclass(frozen=True)
class NodeScalar:
    value: str


@dataclass(frozen=True)
class NodeList:
    items: tuple[ContentNode, ...] = ()


@dataclass(frozen=True)
class NodeMap:
    fields: tuple[tuple[str, ContentNode], ...] = ()

    def get(self, key: str) -> ContentNode | None:
        for k, v in self.fields:
            if k == key:
                return v
        return None


ContentNode = Union[NodeScalar, NodeList, NodeMap]


def parse_property_value(raw: str) -> ContentNode:
    """Decode a docview attribute value into a scalar or a multi-value list."""
    value = _TYPE_HINT_RE.sub("", raw, count=1)
    if len(value) >= 2 and value.startswith("[") and value.endswith("]"):
        inner = value[1:-1]
        if not inner:
            return NodeList()
        return NodeList(tuple(
            NodeScalar(part.replace("\\,", ",")) for part in _MULTI_VALUE_SPLIT_RE.split(inner)
        ))
    return NodeScalar(value)


def _element_to_node(element: ET.Element, doc: XmlDocument) -> NodeMap:
    fields: list[tuple[str, ContentNode]] = [
        (doc.qname(name), parse_property_value(raw)) for name, raw in element.attrib.items()
    ]

    groups: dict[str, list[ContentNode]] = {}
    for child in element:
        groups.setdefault(doc.qname(child.tag), []).append(_element_to_node(child, doc))
    fields.extend((name, NodeList(tuple(nodes))) for name, nodes in groups.items())

    return NodeMap(tuple(fields))


def build_content_tree(doc: XmlDocument) -> NodeMap:
    return NodeMap(((doc.qname(doc.root.tag), _element_to_node(doc.root, doc)),))


def walk(node: ContentNode) -> Iterator[tuple[str, ContentNode]]:
    """Yield every (key, value) pair in the tree, depth-first, parents first."""
    if isinstance(node, NodeMap):
        for key, value in node.fields:
            yield key, value
            yield from walk(value)
    elif isinstance(node, NodeList):
        for item in node.items:
            yield from walk(item)


def scalar_values(node: ContentNode) -> list[str]:
    """Scalars held directly by a node: itself, or the items of a list."""
    if isinstance(node, NodeScalar):
        return [node.value]
    if isinstance(node, NodeList):
        return [item.value for item in node.items if isinstance(item, NodeScalar)]
    return []
