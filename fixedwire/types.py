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
Marker types used to describe a fixed layout with regular Python annotations.

Integers and floats don't have a width in Python, so every numeric field must be annotated with one of the markers
below. They are `NewType`s, so at runtime the values are plain `int`/`float` instances:

>>> from dataclasses import dataclass
>>> @dataclass
... class Sample:
...     channel: U8
...     reading: I32
...     gain: F32
...
>>> Sample(channel=U8(3), reading=I32(-7), gain=F32(0.5))
Sample(channel=3, reading=-7, gain=0.5)

Fixed arrays are written as `Array[T, N]`:

>>> Array[U8, 4]
<class 'fixedwire.types.Array[U8, 4]'>
>>> Array[U8, 4] is Array[U8, 4]
True
>>> try:
...     Array[U8, 0]
... except TypeError as e:
...     print(e)
Array length must be a positive int, got 0
"""

from enum import Enum, IntEnum
from typing import Any, Callable, NewType, TypeVar

from fixedwire.serialization.exceptions import InvalidSchemaError
from fixedwire.utils.typing import ParametrizedTypeMixin

E = TypeVar('E', bound=Enum)

I8 = NewType('I8', int)
U8 = NewType('U8', int)
I16 = NewType('I16', int)
U16 = NewType('U16', int)
I32 = NewType('I32', int)
U32 = NewType('U32', int)
I64 = NewType('I64', int)
U64 = NewType('U64', int)
F32 = NewType('F32', float)
F64 = NewType('F64', float)

# the only types that can be used as the tag of an enum
INT_TAG_TYPES = (I8, U8, I16, U16, I32, U32, I64, U64)


class Array(ParametrizedTypeMixin):
    """ Fixed-length homogeneous array, only meant to be used in annotations as `Array[T, N]`.

    Values are regular tuples (lists are also accepted when encoding) with exactly N items.
    """

    @classmethod
    def __extract_args__(cls, args: tuple[Any, ...], /) -> tuple[Any, ...]:
        if len(args) != 2:
            raise TypeError(f'Array[...] expects exactly two arguments: Array[T, N]; got {len(args)}')
        item_type, length = args
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise TypeError(f'Array length must be a positive int, got {length!r}')
        return item_type, length

    def __new__(cls, *args: Any, **kwargs: Any) -> 'Array':
        raise TypeError('Array is only meant for annotations, use a tuple for the values')


def _reject_implicit_discriminant(name: str, start: int, count: int, last_values: list[Any]) -> Any:
    raise InvalidSchemaError(f'{name} needs an explicit discriminant, auto() is not supported')


class TaggedEnum(Enum):
    """ Base class of the enums that can be encoded.

    Every variant must be given an explicit integer value, `auto()` fails as soon as the class is defined:

    >>> from enum import auto
    >>> try:
    ...     class Implicit(TaggedEnum):
    ...         FIRST = auto()
    ... except InvalidSchemaError as e:
    ...     print(e)
    FIRST needs an explicit discriminant, auto() is not supported
    """

    _generate_next_value_ = staticmethod(_reject_implicit_discriminant)


class TaggedIntEnum(IntEnum):
    """ Same as `TaggedEnum` for enums whose variants are also ints."""

    _generate_next_value_ = staticmethod(_reject_implicit_discriminant)


def tag_type(type_: Any) -> Callable[[type[E]], type[E]]:
    """ Class decorator that declares which integer type carries the discriminant of an enum.

    Every variant must have an explicit integer value, the value is what goes on the wire:

    >>> @tag_type(I8)
    ... class Direction(TaggedIntEnum):
    ...     UP = 1
    ...     DOWN = 2
    ...
    >>> Direction.__tag_type__ is I8
    True

    The declaration is only validated when a codec is made for the enum.
    """
    def decorator(enum_class: type[E]) -> type[E]:
        setattr(enum_class, '__tag_type__', type_)
        return enum_class
    return decorator
