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
This module implements encoding of IEEE-754 floating point numbers, binary32 (4 bytes) or binary64 (8 bytes).

The bit pattern is written as a little-endian integer of the same width, so NaN payloads and the sign of zero are
preserved exactly.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)  # writes 0000c03f
>>> encode_float(se, -2.0, length=8)  # writes 00000000000000c0
>>> bytes(se.finalize()).hex()
'0000c03f00000000000000c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000c03f00000000000000c0'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8)
-2.0

A binary32 value is rounded to the nearest representable value:

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 0.1, length=4)
>>> decode_float(Deserializer.build_bytes_deserializer(se.finalize()), length=4)
0.10000000149011612
"""

import struct

from fixedwire.serialization import Deserializer, Serializer

_FORMATS = {
    4: '<f',
    8: '<d',
}


def _get_format(length: int) -> str:
    try:
        return _FORMATS[length]
    except KeyError:
        raise ValueError(f'unsupported float length: {length}')


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    """ Encode a float using 4 or 8 bytes.

    This modules's docstring has more details and examples.
    """
    format = _get_format(length)
    try:
        data = struct.pack(format, value)
    except OverflowError:
        raise ValueError(f'{value} is too big for a {length * 8}-bit float')
    serializer.write_bytes(data)


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    """ Decode a float from 4 or 8 bytes.

    This modules's docstring has more details and examples.
    """
    value, = deserializer.read_struct(_get_format(length))
    return value
