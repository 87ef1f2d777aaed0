"""Tests for shape introspection and zero values."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Annotated, Any, Dict, List, NewType, Optional, Protocol, Union

import pytest

from struct_defaults import (
    Byte,
    Int8,
    Shape,
    Uint16,
    concrete_type,
    inner_shape,
    is_zero,
    shape_of,
    zero_value,
)

Role = NewType("Role", str)
Port = NewType("Port", Uint16)


class Greeter(Protocol):
    def greet(self) -> str: ...


class Plugin(ABC):
    @abstractmethod
    def run(self) -> None: ...


@dataclass
class Point:
    x: int = 0
    y: int = 0


@dataclass
class Labelled:
    label: str = ""
    point: Point = field(default_factory=Point)
    _secret: int = 0


class Opaque:
    pass


class TestShapeOf:
    """Annotation → direct shape."""

    @pytest.mark.parametrize("tp, shape", [
        (bool, Shape.BOOL),
        (int, Shape.INT),
        (Int8, Shape.INT),
        (timedelta, Shape.INT),
        (Uint16, Shape.UINT),
        (Port, Shape.UINT),
        (Byte, Shape.UINT),
        (float, Shape.FLOAT),
        (str, Shape.STRING),
        (Role, Shape.STRING),
        (bytes, Shape.BYTES),
        (bytearray, Shape.BYTES),
        (Point, Shape.STRUCT),
        (Optional[int], Shape.POINTER),
        (Optional[Point], Shape.POINTER),
        (Any, Shape.POLYMORPHIC),
        (object, Shape.POLYMORPHIC),
        (Greeter, Shape.POLYMORPHIC),
        (Plugin, Shape.POLYMORPHIC),
        (Union[int, str], Shape.POLYMORPHIC),
        (list[int], Shape.SEQUENCE),
        (List[str], Shape.SEQUENCE),
        (list, Shape.SEQUENCE),
        (dict[int, str], Shape.MAP),
        (Dict[str, int], Shape.MAP),
        (datetime, Shape.INVALID),
        (Opaque, Shape.INVALID),
    ])
    def test_shapes(self, tp, shape):
        assert shape_of(tp) is shape

    def test_annotated_is_transparent(self):
        assert shape_of(Annotated[int, "meta"]) is Shape.INT

    def test_pipe_optional_is_pointer(self):
        assert shape_of(int | None) is Shape.POINTER


class TestInnerShape:
    """Innermost shape after unwrapping pointer / sequence / map layers."""

    @pytest.mark.parametrize("tp, shape", [
        (list[int], Shape.INT),
        (list[list[Point]], Shape.STRUCT),
        (Optional[list[Point]], Shape.STRUCT),
        (dict[int, str], Shape.STRING),
        (dict[str, list[Point]], Shape.STRUCT),
        (list[dict[int, Point]], Shape.STRUCT),
        (list[Greeter], Shape.POLYMORPHIC),
        (Optional[Optional[bool]], Shape.BOOL),
    ])
    def test_type_based(self, tp, shape):
        assert inner_shape(tp) is shape

    def test_live_polymorphic_value_resolves(self):
        """A polymorphic location holding a dataclass unwraps into STRUCT."""
        assert inner_shape(Any, Point()) is Shape.STRUCT

    def test_empty_polymorphic_stays_polymorphic(self):
        assert inner_shape(Greeter, None) is Shape.POLYMORPHIC


class TestConcreteType:
    """Exact nominal type behind pointer layers."""

    def test_strips_optional(self):
        assert concrete_type(Optional[Point]) is Point

    def test_keeps_newtype(self):
        assert concrete_type(Optional[Role]) is Role

    def test_plain_type(self):
        assert concrete_type(datetime) is datetime


class TestZeroValues:
    """zero_value / is_zero."""

    @pytest.mark.parametrize("tp, zero", [
        (bool, False),
        (int, 0),
        (Uint16, 0),
        (float, 0.0),
        (str, ""),
        (Role, ""),
        (bytes, b""),
        (timedelta, timedelta(0)),
        (Optional[int], None),
        (list[int], None),
        (dict[int, str], None),
        (datetime, None),
    ])
    def test_zero_value(self, tp, zero):
        assert zero_value(tp) == zero

    def test_zero_struct(self):
        assert zero_value(Point) == Point()

    def test_struct_with_required_field_has_no_zero(self):
        @dataclass
        class Required:
            name: str

        with pytest.raises(TypeError):
            zero_value(Required)

    def test_scalars(self):
        assert is_zero(0, int)
        assert not is_zero(1, int)
        assert is_zero("", str)
        assert not is_zero("a", str)
        assert is_zero(timedelta(0), timedelta)
        assert is_zero(b"", bytes)

    def test_empty_containers_are_not_zero(self):
        """``[]`` / ``{}`` are explicitly empty, only ``None`` is unset."""
        assert is_zero(None, list[int])
        assert not is_zero([], list[int])
        assert not is_zero({}, dict[int, str])

    def test_non_null_pointer_is_not_zero(self):
        assert not is_zero(0, Optional[int])

    def test_struct_zero_checks_every_member(self):
        assert is_zero(Labelled(), Labelled)
        assert not is_zero(Labelled(point=Point(x=1)), Labelled)
        assert not is_zero(Labelled(_secret=1), Labelled)
