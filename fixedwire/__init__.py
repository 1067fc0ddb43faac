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
Fixed layout binary serialization driven by type annotations.

This module exports the types and functions that make the main API. `Reader` and `Writer` are the byte buffer
cursors, everything else works on top of them.
"""

from fixedwire.codecs import Codec, decode, encode, make_codec, size_of
from fixedwire.codecs.derive import serializable
from fixedwire.serialization import (
    BufferOverflowError,
    BytesDeserializer,
    BytesSerializer,
    Deserializer,
    InvalidSchemaError,
    InvalidVariantError,
    SerializationError,
    Serializer,
    TrailingDataError,
    UnsupportedTypeError,
)
from fixedwire.serialization.adapters import MaxBytesExceededError
from fixedwire.types import F32, F64, I8, I16, I32, I64, U8, U16, U32, U64, Array, TaggedEnum, TaggedIntEnum, tag_type
from fixedwire.version import __version__

Reader = BytesDeserializer
Writer = BytesSerializer

__all__ = [
    'F32',
    'F64',
    'I8',
    'I16',
    'I32',
    'I64',
    'U8',
    'U16',
    'U32',
    'U64',
    'Array',
    'BufferOverflowError',
    'BytesDeserializer',
    'BytesSerializer',
    'Codec',
    'Deserializer',
    'InvalidSchemaError',
    'InvalidVariantError',
    'MaxBytesExceededError',
    'Reader',
    'SerializationError',
    'Serializer',
    'TaggedEnum',
    'TaggedIntEnum',
    'TrailingDataError',
    'UnsupportedTypeError',
    'Writer',
    'decode',
    'encode',
    'make_codec',
    'serializable',
    'size_of',
    'tag_type',
    '__version__',
]
