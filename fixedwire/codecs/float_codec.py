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

import math
import struct
from typing import ClassVar

from typing_extensions import Self, override

from fixedwire.codecs.codec import Codec
from fixedwire.serialization import Deserializer, Serializer
from fixedwire.serialization.encoding.float import decode_float, encode_float
from fixedwire.utils.typing import is_subclass


class _FloatCodec(Codec[float]):
    """ Base class for IEEE-754 floats, `int` values are accepted when encoding and always decoded as `float`.
    """

    # XXX: subclass must define these values:
    _byte_size: ClassVar[int]
    _format: ClassVar[str]

    def __init__(self) -> None:
        self.size = self._byte_size

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise TypeError(f'expected float, got {type(value).__name__}')
        try:
            as_float = float(value)
        except OverflowError:
            raise ValueError(f'{value} does not fit in {type(self).__name__}')
        if math.isfinite(as_float) and not math.isfinite(self._round_trip(as_float)):
            raise ValueError(f'{value} does not fit in {type(self).__name__}')

    def _round_trip(self, value: float) -> float:
        try:
            data = struct.pack(self._format, value)
        except OverflowError:
            return math.inf
        value, = struct.unpack(self._format, data)
        return value

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        encode_float(serializer, value, length=self._byte_size)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return decode_float(deserializer, length=self._byte_size)


class F32Codec(_FloatCodec):
    _byte_size = 4
    _format = '<f'


class F64Codec(_FloatCodec):
    _byte_size = 8
    _format = '<d'
