# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Codecs turn type annotations into fixed binary layouts.

>>> from dataclasses import dataclass
>>> from fixedwire.types import I8, U16, Array
>>> @dataclass
... class Point:
...     x: I8
...     y: I8
...
>>> size_of(Point)
2
>>> encode(Point, Point(x=I8(1), y=I8(-1))).hex()
'01ff'
>>> decode(Point, bytes.fromhex('01ff'))
Point(x=1, y=-1)
>>> size_of(Array[U16, 3])
6
>>> encode(Array[U16, 3], (1, 2, 3)).hex()
'010002000300'
"""

from enum import Enum
from functools import lru_cache
from typing import Any, NamedTuple, TypeVar

from structlog import get_logger

from fixedwire.codecs.array_codec import ArrayCodec
from fixedwire.codecs.codec import Codec, TypeAliasMap, TypeToCodecMap
from fixedwire.codecs.enum_codec import EnumCodec
from fixedwire.codecs.float_codec import F32Codec, F64Codec
from fixedwire.codecs.sized_int_codec import (
    I8Codec,
    I16Codec,
    I32Codec,
    I64Codec,
    U8Codec,
    U16Codec,
    U32Codec,
    U64Codec,
)
from fixedwire.codecs.struct_codec import StructCodec
from fixedwire.codecs.tuple_codec import TupleCodec
from fixedwire.codecs.utils import Dataclass
from fixedwire.types import F32, F64, I8, I16, I32, I64, U8, U16, U32, U64, Array
from fixedwire.utils.typing import pretty_type

__all__ = [
    'DEFAULT_CODECS_MAP',
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'ArrayCodec',
    'Codec',
    'Dataclass',
    'EnumCodec',
    'F32Codec',
    'F64Codec',
    'I16Codec',
    'I32Codec',
    'I64Codec',
    'I8Codec',
    'StructCodec',
    'TupleCodec',
    'TypeAliasMap',
    'TypeToCodecMap',
    'U16Codec',
    'U32Codec',
    'U64Codec',
    'U8Codec',
    'decode',
    'encode',
    'make_codec',
    'size_of',
]

logger = get_logger()

T = TypeVar('T')

# builtin `float` is a binary64 in Python already, the only builtin with an unambiguous width
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    float: F64,
}

DEFAULT_CODECS_MAP: TypeToCodecMap = {
    I8: I8Codec,
    U8: U8Codec,
    I16: I16Codec,
    U16: U16Codec,
    I32: I32Codec,
    U32: U32Codec,
    I64: I64Codec,
    U64: U64Codec,
    F32: F32Codec,
    F64: F64Codec,
    Array: ArrayCodec,
    tuple: TupleCodec,
    NamedTuple: StructCodec,
    Dataclass: StructCodec,
    Enum: EnumCodec,
}

DEFAULT_TYPE_MAP = Codec.TypeMap(DEFAULT_TYPE_ALIAS_MAP, DEFAULT_CODECS_MAP)


def make_codec(type_: type[T], /) -> Codec[T]:
    """ Like Codec.from_type, but with the default maps, and the result is cached for hashable annotations.

    If you need to customize the mapping use `Codec.from_type` instead.
    """
    try:
        hash(type_)
    except TypeError:
        return _build_codec(type_)
    return _make_cached_codec(type_)


@lru_cache(maxsize=None)
def _make_cached_codec(type_: Any, /) -> Codec:
    return _build_codec(type_)


def _build_codec(type_: Any, /) -> Codec:
    codec: Codec = Codec.from_type(type_, type_map=DEFAULT_TYPE_MAP)
    logger.debug('codec built', type=pretty_type(type_), codec=type(codec).__name__, size=codec.size)
    return codec


def size_of(type_: type[Any], /) -> int:
    """Number of bytes that any value of the given type takes when encoded."""
    return make_codec(type_).size


def encode(type_: type[T], value: T, /) -> bytes:
    """Encode a value of the given type into a new `bytes` with exactly `size_of(type_)` bytes."""
    return make_codec(type_).to_bytes(value)


def decode(type_: type[T], data: bytes, /) -> T:
    """Decode a value of the given type, `data` must have exactly `size_of(type_)` bytes."""
    return make_codec(type_).from_bytes(data)
