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

from collections.abc import Iterable

from typing_extensions import Self, override

from fixedwire.codecs.codec import Codec
from fixedwire.serialization import Deserializer, InvalidSchemaError, Serializer
from fixedwire.utils.typing import get_args, get_origin


# XXX: we can't usefully describe the tuple type
class TupleCodec(Codec[tuple]):
    """ Represents anonymous positional products, like `tuple[U8, I32]`, encoded as their items in order.

    Only fixed size tuples are supported, `tuple[T, ...]` has no fixed layout. `tuple[()]` is a unit, with size 0.
    """

    __slots__ = ('_args',)

    _args: tuple[Codec, ...]

    def __init__(self, args: Iterable[Codec]) -> None:
        self._args = tuple(args)
        for arg in self._args:
            assert isinstance(arg, Codec)
        self.size = sum(arg.size for arg in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: Codec.TypeMap) -> Self:
        origin_type = get_origin(type_)
        if origin_type is None:
            raise InvalidSchemaError('expected tuple[<args...>], a bare tuple has no fixed layout')
        if not issubclass(origin_type, tuple):
            raise TypeError('expected tuple type')
        args = get_args(type_)
        if Ellipsis in args:
            raise InvalidSchemaError(f'{type_} has a variable length, use Array[T, N] instead')
        return cls(Codec.from_type(arg, type_map=type_map) for arg in args)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise TypeError(f'expected tuple, got {type(value).__name__}')
        if len(value) != len(self._args):
            raise ValueError(f'expected a tuple of {len(self._args)} items, got {len(value)}')
        if deep:
            for i, arg_codec in zip(value, self._args):
                arg_codec._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /) -> None:
        from fixedwire.serialization.compound_encoding.tuple import encode_tuple
        encode_tuple(serializer, tuple(value), tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple:
        from fixedwire.serialization.compound_encoding.tuple import decode_tuple
        return decode_tuple(deserializer, tuple(i.deserialize for i in self._args))
