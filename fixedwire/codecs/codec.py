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

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generic, NamedTuple, Optional, TypeAlias, TypeVar, final

from typing_extensions import Self

from fixedwire.codecs.utils import get_aliased_type, get_usable_origin_type
from fixedwire.serialization import Deserializer, InvalidSchemaError, Serializer
from fixedwire.utils.typing import pretty_type

T = TypeVar('T')

TypeAliasMap: TypeAlias = Mapping[Any, Any]
TypeToCodecMap: TypeAlias = Mapping[Any, type['Codec']]

# types whose codec is currently being built, used to reject self-referencing products
_building: ContextVar[tuple[Any, ...]] = ContextVar('_building', default=())

# CHECK_ENCODED_SIZE for the serialize call in progress, None outside of one
_check_size: ContextVar[Optional[bool]] = ContextVar('_check_size', default=None)


class Codec(ABC, Generic[T]):
    """ This class models a type with a fixed binary layout and how it will be (de)serialized.

    A codec is built once from a type annotation (see `Codec.from_type`), building it is the moment when the type is
    validated, every error about the shape of a type is raised then, never while encoding or decoding. After that it
    provides the three things every fixed layout needs: the static encoded `size`, `serialize` and `deserialize`.

    For every codec and every valid value, `serialize` writes exactly `size` bytes.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        codecs_map: TypeToCodecMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ('size',)

    # number of bytes written by serialize and consumed by deserialize, for any value
    size: int

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> Codec[T]:
        """ Instantiate a Codec instance from a type annotation using the given maps.

        A `codecs_map` associates concrete types to concrete Codec classes, while an `alias_map` associate types with
        substitute types to use instead.
        """
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        building = _building.get()
        if aliased_type in building:
            raise InvalidSchemaError(f'{pretty_type(aliased_type)} contains itself, it cannot have a fixed size')
        usable_origin = get_usable_origin_type(aliased_type, type_map=type_map)
        codec_class = type_map.codecs_map[usable_origin]
        with _push_building(aliased_type):
            return codec_class._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a Codec instance from a type annotation.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        decide on using `Codec.from_type`, forwarding the given `type_map` to continue instantiating Codec
        specializations, this is the case particularly for compound codecs, like ArrayCodec or StructCodec.
        """
        # XXX: a Codec that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a Codec.TypeMap')

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError if the value's type is not compatible, or a ValueError if it doesn't fit the layout.

        The check recurses into compound values.
        """
        # XXX: subclasses must implement Codec._check_value, not Codec.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value instance according to the layout that was built.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        check_size = _check_size.get()
        if check_size is None:
            # the setting is read once by the outermost call and reused by the nested ones
            from fixedwire.conf import get_global_settings
            token = _check_size.set(get_global_settings().CHECK_ENCODED_SIZE)
            try:
                self.serialize(serializer, value)
            finally:
                _check_size.reset(token)
            return
        # XXX: subclasses must implement Codec._serialize, not Codec.serialize
        self._check_value(value, deep=False)
        if not check_size:
            self._serialize(serializer, value)
            return
        pos0 = serializer.cur_pos()
        self._serialize(serializer, value)
        written = serializer.cur_pos() - pos0
        assert written == self.size, f'{type(self).__name__} wrote {written} bytes, expected {self.size}'

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Deserialize a value instance according to the layout that was built.

        Deserialization is expected to always produce valid values, a value that doesn't pass the shallow check
        results in AssertionError (no TypeError).
        """
        # XXX: subclasses must implement Codec._deserialize, not Codec.deserialize
        value = self._deserialize(deserializer)
        assert self._is_valid(value), f'{type(self).__name__} produced an invalid value: {value!r}'
        return value

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        from fixedwire.conf import get_global_settings
        settings = get_global_settings()
        serializer = Serializer.build_bytes_serializer().with_optional_max_bytes(settings.MAX_WRITE_BYTES)
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /) -> T:
        """ Shortcut to quickly parse a value T from `bytes` and avoid using the serialization system.

        All of `data` must be consumed, otherwise TrailingDataError is raised.
        """
        from fixedwire.conf import get_global_settings
        settings = get_global_settings()
        deserializer = Deserializer.build_bytes_deserializer(data).with_optional_max_bytes(settings.MAX_READ_BYTES)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    def _is_valid(self, value: T) -> bool:
        try:
            self._check_value(value, deep=False)
        except (TypeError, ValueError):
            return False
        return True

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `Codec.check_value`, should raise TypeError/ValueError for invalid values.

        Compound values should use `Codec._check_value` on the inner codec(s) instead of `Codec.check_value` and pass
        the appropriate deep argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        When implementing the serialization with compound encoders, `Codec.serialize` should be passed as an `Encoder`
        instead of `Codec._serialize`, by passing `Codec.serialize` the next `Codec._serialize` implementation will be
        able to assume that the value was checked.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        """ Inner implementation of `deserialize`, it is expected that deserializers always produce valid values.
        """
        raise NotImplementedError


@contextmanager
def _push_building(type_: Any) -> Iterator[None]:
    token = _building.set(_building.get() + (type_,))
    try:
        yield
    finally:
        _building.reset(token)
