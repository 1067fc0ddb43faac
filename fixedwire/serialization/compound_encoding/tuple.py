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
A product of heterogeneous values, like `tuple[A, B, C]` or the fields of a record, has no "format" per-se: its
encoding is just the encoding of A concatenated with B concatenated with C, in declared order. So this compound
encoder is basically a shortcut that can be used by cases that already have a tuple of values and a matching tuple of
encoders of those values.

>>> from functools import partial
>>> from fixedwire.serialization.encoding.int import decode_int, encode_int
>>> from fixedwire.serialization.encoding.float import decode_float, encode_float
>>> se = Serializer.build_bytes_serializer()
>>> values = (7, -2, 0.5)
>>> encoders = (
...     partial(encode_int, length=1, signed=False),
...     partial(encode_int, length=2, signed=True),
...     partial(encode_float, length=4),
... )
>>> encode_tuple(se, values, encoders)
>>> bytes(se.finalize()).hex()
'07feff0000003f'

Breakdown of the result:

    07: 7 (u8)
    feff: -2 (i16)
    0000003f: 0.5 (f32)

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('07feff0000003f'))
>>> decoders = (
...     partial(decode_int, length=1, signed=False),
...     partial(decode_int, length=2, signed=True),
...     partial(decode_float, length=4),
... )
>>> decode_tuple(de, decoders)
(7, -2, 0.5)
"""

from typing import Any

from typing_extensions import TypeVarTuple, Unpack

from fixedwire.serialization import Deserializer, Serializer

from . import Decoder, Encoder

Ts = TypeVarTuple('Ts')


def encode_tuple(serializer: Serializer, values: tuple[Unpack[Ts]], encoders: tuple[Encoder[Any], ...]) -> None:
    assert len(values) == len(encoders)
    # mypy can't track tuple element-wise mapping yet, safe due to length check above
    for value, encoder in zip(values, encoders):  # type: ignore
        encoder(serializer, value)


def decode_tuple(deserializer: Deserializer, decoders: tuple[Decoder[Any], ...]) -> tuple[Unpack[Ts]]:
    return tuple(decoder(deserializer) for decoder in decoders)  # type: ignore[return-value]
