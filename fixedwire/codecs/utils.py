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

from __future__ import annotations

from dataclasses import is_dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ForwardRef, NamedTuple, TypeVar

from structlog import get_logger

from fixedwire.serialization import InvalidSchemaError, UnsupportedTypeError
from fixedwire.utils.typing import get_origin, is_subclass, is_union, pretty_type

if TYPE_CHECKING:
    from fixedwire.codecs.codec import Codec, TypeAliasMap, TypeToCodecMap

logger = get_logger()


class Dataclass:
    """Placeholder used as the key for every dataclass in a `Codec.TypeMap`, since they share no base class."""


def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its alias, when there is one.

    Only the type itself is replaced, arguments are aliased when the codecs for them are built.

    >>> from fixedwire.types import F64
    >>> get_aliased_type(float, {float: F64}, _verbose=False) is F64
    True
    >>> get_aliased_type(tuple[float], {float: F64}, _verbose=False)
    tuple[float]
    """
    try:
        aliased_type = alias_map.get(type_, type_)
    except TypeError:
        # unhashable annotation, it can't be in the map
        return type_
    if aliased_type is not type_ and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(aliased_type))
    return aliased_type


def get_usable_origin_type(type_: Any, /, *, type_map: Codec.TypeMap) -> Any:
    """ The purpose of this function is to map a given type into a key that is usable in a Codec.TypeMap

    The returned key is guaranteed to exist in `type_map.codecs_map`. Types that can never have a fixed layout raise
    InvalidSchemaError, types that simply have no codec in the map raise UnsupportedTypeError.

    >>> from fixedwire.codecs import DEFAULT_TYPE_MAP
    >>> from fixedwire.types import U8, Array
    >>> get_usable_origin_type(U8, type_map=DEFAULT_TYPE_MAP) is U8
    True
    >>> get_usable_origin_type(Array[U8, 2], type_map=DEFAULT_TYPE_MAP) is Array
    True
    >>> get_usable_origin_type(tuple[U8, U8], type_map=DEFAULT_TYPE_MAP)
    <class 'tuple'>
    """
    codecs_map = type_map.codecs_map

    if isinstance(type_, (str, ForwardRef)):
        raise UnsupportedTypeError(f'unresolved string annotation: {type_!r}')

    if isinstance(type_, TypeVar):
        raise UnsupportedTypeError(f'type parameter {type_!r} is not bound to a concrete type')

    if is_union(type_):
        raise InvalidSchemaError(
            f'{pretty_type(type_)}: unions are not supported, only products and tagged enums have a fixed layout'
        )

    if _in_map(type_, codecs_map):
        return type_

    origin_type = get_origin(type_) or type_
    if _in_map(origin_type, codecs_map):
        return origin_type

    if isinstance(origin_type, type):
        if Enum in codecs_map and issubclass(origin_type, Enum):
            return Enum
        if Dataclass in codecs_map and is_dataclass(origin_type):
            return Dataclass
        if NamedTuple in codecs_map and issubclass(origin_type, tuple) and hasattr(origin_type, '_fields'):
            return NamedTuple

    if is_subclass(type_, int) and not is_subclass(type_, Enum):
        raise UnsupportedTypeError(f'{pretty_type(type_)} has no fixed width, use one of I8, U8, ..., I64, U64 instead')

    raise UnsupportedTypeError(f'type {pretty_type(type_)} is not supported by any Codec class')


def _in_map(key: Any, codecs_map: TypeToCodecMap) -> bool:
    try:
        return key in codecs_map
    except TypeError:
        # unhashable annotation
        return False
