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

from collections.abc import Sequence
from typing import Any, TypeVar

from typing_extensions import Self, override

from fixedwire.codecs.codec import Codec
from fixedwire.serialization import Deserializer, InvalidSchemaError, Serializer
from fixedwire.types import Array
from fixedwire.utils.typing import get_args, get_origin

T = TypeVar('T')


class ArrayCodec(Codec[tuple[T, ...]]):
    """ Represents `Array[T, N]`, exactly N values of T with no length prefix.

    Values are decoded as tuples, lists of the right length are also accepted when encoding.
    """

    __slots__ = ('_item', '_length')

    _item: Codec[T]
    _length: int

    def __init__(self, item: Codec[T], length: int) -> None:
        self._item = item
        self._length = length
        self.size = item.size * length

    @property
    def length(self) -> int:
        return self._length

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple[T, ...]], /, *, type_map: Codec.TypeMap) -> Self:
        from fixedwire.conf import get_global_settings
        if get_origin(type_) is not Array:
            raise TypeError('expected Array[T, N]')
        item_type, length = get_args(type_)
        max_length = get_global_settings().MAX_ARRAY_LENGTH
        if length > max_length:
            raise InvalidSchemaError(f'Array length {length} is above the maximum of {max_length}')
        return cls(Codec.from_type(item_type, type_map=type_map), length)

    @override
    def _check_value(self, value: Sequence[Any], /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise TypeError(f'expected tuple or list, got {type(value).__name__}')
        if len(value) != self._length:
            raise ValueError(f'expected {self._length} elements, got {len(value)}')
        if deep:
            for item in value:
                self._item._check_value(item, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Sequence[T], /) -> None:
        from fixedwire.serialization.compound_encoding.array import encode_array
        encode_array(serializer, value, self._item.serialize, length=self._length)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple[T, ...]:
        from fixedwire.serialization.compound_encoding.array import decode_array
        return decode_array(deserializer, self._item.deserialize, length=self._length)
