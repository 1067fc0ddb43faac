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
Class decorator that gives a record or an enum its fixed layout codec, and methods that use it.

>>> from dataclasses import dataclass
>>> from fixedwire.types import U8, U16
>>> @serializable
... @dataclass(frozen=True)
... class Header:
...     version: U8
...     length: U16
...
>>> Header.SIZE
3
>>> Header(version=U8(1), length=U16(512)).to_bytes().hex()
'010002'
>>> Header.from_bytes(bytes.fromhex('010002'))
Header(version=1, length=512)

The codec is made when the class is decorated, so every annotation must already be resolvable at that point.
"""

from typing import Any, TypeVar

from fixedwire.codecs import make_codec
from fixedwire.serialization import Deserializer, Serializer

C = TypeVar('C', bound=type)

_DERIVED_NAMES = ('__codec__', 'SIZE', 'serialize', 'deserialize', 'to_bytes', 'from_bytes')


def serializable(cls: C) -> C:
    """ Make the codec of a dataclass, NamedTuple or tagged enum and attach it to the class.

    Adds `__codec__`, `SIZE`, the `serialize`/`to_bytes` methods and the `deserialize`/`from_bytes` classmethods.
    Generic classes can't be decorated, use `make_codec(Class[Args])` for them.
    """
    if getattr(cls, '__parameters__', ()):
        raise TypeError(f'{cls.__name__} is generic, use make_codec({cls.__name__}[...]) instead')

    annotations = getattr(cls, '__annotations__', {})
    for name in _DERIVED_NAMES:
        if name in vars(cls) or name in annotations:
            raise TypeError(f'{cls.__name__} already defines {name!r}')

    codec = make_codec(cls)

    def serialize(self: Any, serializer: Serializer) -> None:
        codec.serialize(serializer, self)

    def to_bytes(self: Any) -> bytes:
        return codec.to_bytes(self)

    def deserialize(cls_: type, deserializer: Deserializer) -> Any:
        return codec.deserialize(deserializer)

    def from_bytes(cls_: type, data: bytes) -> Any:
        return codec.from_bytes(data)

    setattr(cls, '__codec__', codec)
    setattr(cls, 'SIZE', codec.size)
    setattr(cls, 'serialize', serialize)
    setattr(cls, 'to_bytes', to_bytes)
    setattr(cls, 'deserialize', classmethod(deserialize))
    setattr(cls, 'from_bytes', classmethod(from_bytes))
    return cls
