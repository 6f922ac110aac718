"""Tests for content descriptor trees."""

from __future__ import annotations

from pkgcheck.validator.archive import ArchiveEntry
from pkgcheck.validator.content_node import (
    NodeList,
    NodeMap,
    NodeScalar,
    build_content_tree,
    parse_property_value,
    scalar_values,
    walk,
)
from pkgcheck.validator.markup import parse_entry

DESCRIPTOR = """<?xml version="1.0" encoding="UTF-8"?>
<jcr:root xmlns:jcr="http://www.jcp.org/jcr/1.0" xmlns:cq="http://www.day.com/jcr/cq/1.0"
    jcr:primaryType="cq:Page">
    <jcr:content cq:template="/conf/acme/settings/wcm/templates/page" jcr:title="Home">
        <root jcr:primaryType="nt:unstructured"/>
        <root jcr:primaryType="nt:unstructured"/>
    </jcr:content>
</jcr:root>
"""


def _tree(xml: str) -> NodeMap:
    return build_content_tree(parse_entry(ArchiveEntry("jcr_root/.content.xml", False, xml.encode())))


class TestParsePropertyValue:
    def test_plain_scalar(self) -> None:
        assert parse_property_value("admin") == NodeScalar("admin")

    def test_type_hint_is_stripped(self) -> None:
        assert parse_property_value("{Boolean}true") == NodeScalar("true")

    def test_multi_value(self) -> None:
        assert parse_property_value("[mix:versionable,rep:AccessControllable]") == NodeList(
            (NodeScalar("mix:versionable"), NodeScalar("rep:AccessControllable"))
        )

    def test_typed_multi_value(self) -> None:
        assert parse_property_value("{Name}[mix:versionable]") == NodeList(
            (NodeScalar("mix:versionable"),)
        )

    def test_empty_multi_value(self) -> None:
        assert parse_property_value("[]") == NodeList()

    def test_escaped_comma(self) -> None:
        assert scalar_values(parse_property_value(r"[a\,b,c]")) == ["a,b", "c"]


class TestBuildContentTree:
    def test_prefixes_are_restored(self) -> None:
        tree = _tree(DESCRIPTOR)
        root = tree.get("jcr:root")
        assert isinstance(root, NodeMap)
        assert root.get("jcr:primaryType") == NodeScalar("cq:Page")
        content = root.get("jcr:content")
        assert isinstance(content, NodeList)
        page = content.items[0]
        assert isinstance(page, NodeMap)
        assert page.get("cq:template") == NodeScalar("/conf/acme/settings/wcm/templates/page")

    def test_children_grouped_by_name(self) -> None:
        root = _tree(DESCRIPTOR).get("jcr:root")
        page = root.get("jcr:content").items[0]
        children = page.get("root")
        assert isinstance(children, NodeList)
        assert len(children.items) == 2


class TestWalk:
    def test_visits_every_depth_parent_first(self) -> None:
        keys = [k for k, _ in walk(_tree(DESCRIPTOR))]
        assert keys == [
            "jcr:root",
            "jcr:primaryType",
            "jcr:content",
            "cq:template",
            "jcr:title",
            "root",
            "jcr:primaryType",
            "jcr:primaryType",
        ]

    def test_walks_lists_of_maps(self) -> None:
        tree = NodeMap((
            ("a", NodeList((NodeMap((("b", NodeScalar("1")),)), NodeScalar("x")))),
        ))
        assert [k for k, _ in walk(tree)] == ["a", "b"]


def test_scalar_values_of_map_is_empty() -> None:
    assert scalar_values(NodeMap()) == []
