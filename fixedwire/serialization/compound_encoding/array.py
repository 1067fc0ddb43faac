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

r"""
A fixed array is N values of the same type, encoded one after the other in ascending index order.

Layout:

    [item 0][item 1]...[item N-1]

There's no length prefix, the length is part of the type and both sides are expected to know it.

>>> from functools import partial
>>> from fixedwire.serialization.encoding.int import decode_int, encode_int
>>> se = Serializer.build_bytes_serializer()
>>> encode_array(se, (1, 2, 3), partial(encode_int, length=2, signed=False), length=3)
>>> bytes(se.finalize()).hex()
'010002000300'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010002000300'))
>>> decode_array(de, partial(decode_int, length=2, signed=False), length=3)
(1, 2, 3)

Decoding stops at the first element that fails, the cursor is left right before that element:

>>> from fixedwire.serialization import BufferOverflowError
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100020003'))
>>> try:
...     decode_array(de, partial(decode_int, length=2, signed=False), length=3)
... except BufferOverflowError:
...     print('overflow')
overflow
>>> de.cur_pos()
4
"""

from collections.abc import Sequence
from typing import TypeVar

from fixedwire.serialization import Deserializer, Serializer

from . import Decoder, Encoder

T = TypeVar('T')


def encode_array(serializer: Serializer, values: Sequence[T], encoder: Encoder[T], *, length: int) -> None:
    if len(values) != length:
        raise ValueError(f'expected {length} elements, got {len(values)}')
    for value in values:
        encoder(serializer, value)


def decode_array(deserializer: Deserializer, decoder: Decoder[T], *, length: int) -> tuple[T, ...]:
    values: list[T] = []
    for _ in range(length):
        values.append(decoder(deserializer))
    return tuple(values)
