from .core import DIVE_KEY, OMIT_KEY, FillHandler, Filler, TagHandler
from .factory import build_default_filler, build_filler
from .fields import AttrRef, Field, Holder, ItemRef, Ref
from .handlers import ISO8601, RFC1123, RFC3339, RFC822Z
from .kinds import (
    Byte,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from .literal import tokenize_values, unwrap_literal
from .options import (
    Option,
    parse_duration,
    use_default,
    use_default_type,
    use_dive_key,
    use_omit_key,
    use_tag,
    use_time_format,
)
from .shapes import Shape, concrete_type, inner_shape, is_zero, shape_of, zero_value
from .walker import DEFAULT_TAG, tagged, walk_struct

__all__ = [
    "Filler",
    "FillHandler",
    "TagHandler",
    "Field",
    "Ref",
    "AttrRef",
    "ItemRef",
    "Holder",
    "build_filler",
    "build_default_filler",
    "Option",
    "use_tag",
    "use_omit_key",
    "use_dive_key",
    "use_time_format",
    "parse_duration",
    "use_default_type",
    "use_default",
    "tagged",
    "walk_struct",
    "tokenize_values",
    "unwrap_literal",
    "Shape",
    "shape_of",
    "inner_shape",
    "concrete_type",
    "is_zero",
    "zero_value",
    "DEFAULT_TAG",
    "OMIT_KEY",
    "DIVE_KEY",
    "ISO8601",
    "RFC3339",
    "RFC822Z",
    "RFC1123",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Byte",
    "Float32",
    "Float64",
]
