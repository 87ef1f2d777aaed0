"""Tests for the struct walker and the tagged() helper."""

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

from struct_defaults import AttrRef, Field, Holder, tagged, walk_struct


@dataclass
class Server:
    host: str = tagged("  localhost  ", default="")
    port: int = field(default=0, metadata={"default": "8080", "doc": "listen port"})
    name: str = ""
    env_port: int = tagged("9090", tag="env", default=0)
    _cache: dict = tagged("{a:1}", default=None)


@dataclass
class TreeNode:
    parent: "Optional[TreeNode]" = None


@dataclass(frozen=True)
class Frozen:
    host: str = tagged("localhost", default="")


def _root(value):
    return Field(Holder(type(value), value))


class TestTagged:
    """Test the tagged() field helper."""

    def test_stores_text_under_default_tag(self):
        meta = dataclasses.fields(Server)[0].metadata
        assert meta["default"] == "  localhost  "

    def test_custom_tag(self):
        meta = {f.name: f.metadata for f in dataclasses.fields(Server)}["env_port"]
        assert dict(meta) == {"env": "9090"}

    def test_merges_metadata(self):
        @dataclass
        class Doc:
            x: int = tagged("1", default=0, metadata={"doc": "x axis"})

        assert dict(dataclasses.fields(Doc)[0].metadata) == {"doc": "x axis", "default": "1"}

    def test_passes_field_arguments(self):
        @dataclass
        class Bag:
            items: list = tagged("[a]", default_factory=list, repr=False)

        assert Bag().items == []
        assert repr(Bag()).endswith("Bag()")


class TestWalkStruct:
    """Test member enumeration."""

    def test_public_members_in_order(self):
        names = [f.ref.name for f in walk_struct(_root(Server()), "default")]
        assert names == ["host", "port", "name", "env_port"]

    def test_tags_are_trimmed(self):
        tags = {f.ref.name: f.tag for f in walk_struct(_root(Server()), "default")}
        assert tags == {"host": "localhost", "port": "8080", "name": "", "env_port": ""}

    def test_tag_name_selects_metadata_key(self):
        tags = {f.ref.name: f.tag for f in walk_struct(_root(Server()), "env")}
        assert tags["env_port"] == "9090"
        assert tags["host"] == ""

    def test_members_point_at_the_owner(self):
        server = Server()
        root = _root(server)
        member = next(walk_struct(root, "default"))
        assert isinstance(member.ref, AttrRef)
        assert member.parent is root
        assert member.type is str

        member.set("example.org")
        assert server.host == "example.org"

    def test_resolves_string_annotations(self):
        member = next(walk_struct(_root(TreeNode()), "default"))
        assert member.type == Optional[TreeNode]

    def test_frozen_yields_nothing(self):
        assert list(walk_struct(_root(Frozen()), "default")) == []

    def test_non_struct_yields_nothing(self):
        assert list(walk_struct(Field(Holder(int, 3)), "default")) == []
        assert list(walk_struct(Field(Holder(Optional[Server], None)), "default")) == []
