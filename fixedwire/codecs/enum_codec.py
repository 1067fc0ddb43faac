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

from enum import Enum
from typing import TypeVar

from typing_extensions import Self, override

from fixedwire.codecs.codec import Codec
from fixedwire.codecs.sized_int_codec import _SizedIntCodec
from fixedwire.serialization import Deserializer, InvalidSchemaError, InvalidVariantError, Serializer
from fixedwire.types import INT_TAG_TYPES, TaggedEnum, TaggedIntEnum
from fixedwire.utils.typing import is_subclass, pretty_type

E = TypeVar('E', bound=Enum)


class EnumCodec(Codec[E]):
    """ Codec for enums whose variants carry no data, only an explicit integer discriminant.

    The tag type is declared with `@tag_type(...)` on the enum class. The encoding of a variant is the encoding of its
    discriminant with the tag type, so the size of every variant is the size of the tag.
    """

    __slots__ = ('_enum_class', '_tag', '_variants')

    _enum_class: type[E]
    _tag: Codec[int]
    # discriminant to variant, in declared order
    _variants: dict[int, E]

    def __init__(self, enum_class: type[E], tag: Codec[int], variants: dict[int, E]) -> None:
        self._enum_class = enum_class
        self._tag = tag
        self._variants = variants
        self.size = tag.size

    @property
    def enum_class(self) -> type[E]:
        return self._enum_class

    @override
    @classmethod
    def _from_type(cls, type_: type[E], /, *, type_map: Codec.TypeMap) -> Self:
        if not is_subclass(type_, Enum):
            raise TypeError('expected Enum subclass')
        name = type_.__name__

        tag_type = getattr(type_, '__tag_type__', None)
        if tag_type is None:
            raise InvalidSchemaError(f'{name} has no tag type, declare one with @tag_type(...)')
        if tag_type not in INT_TAG_TYPES:
            raise InvalidSchemaError(f'{name} tag type must be a fixed width integer, got {pretty_type(tag_type)}')
        if not issubclass(type_, (TaggedEnum, TaggedIntEnum)):
            # the bases reject auto(), so every discriminant was written by hand
            raise InvalidSchemaError(f'{name} must derive from TaggedEnum or TaggedIntEnum')
        tag = Codec.from_type(tag_type, type_map=type_map)
        assert isinstance(tag, _SizedIntCodec)

        variants: dict[int, E] = {}
        for variant_name, variant in type_.__members__.items():
            discriminant = variant.value
            if isinstance(discriminant, bool) or not isinstance(discriminant, int):
                raise InvalidSchemaError(
                    f'{name}.{variant_name} must have an int discriminant, variants that carry data are not supported'
                )
            if not tag.lower_bound_value() <= discriminant <= tag.upper_bound_value():
                raise InvalidSchemaError(
                    f'{name}.{variant_name} discriminant {discriminant} does not fit in {pretty_type(tag_type)}'
                )
            # aliases share the discriminant of the variant declared first
            variants.setdefault(discriminant, variant)
        return cls(type_, tag, variants)

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self._enum_class):
            raise TypeError(f'expected {self._enum_class.__name__}, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: E, /) -> None:
        self._tag.serialize(serializer, int(value.value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> E:
        discriminant = self._tag.deserialize(deserializer)
        variant = self._variants.get(discriminant)
        if variant is None:
            raise InvalidVariantError(self._enum_class, discriminant)
        return variant
