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
Codec for records: dataclasses are named structs, NamedTuples are positional structs, and either one without fields is
a unit struct. Both are encoded as the concatenation of their fields in declared order, field names never go on the
wire, so the two kinds of struct share a single codec.

Generic records are supported through `typing.Generic`, the codec is made for a parametrization, like
`Wrapper[U32]`, and every type parameter in the field annotations is replaced by the matching argument before the
field codecs are made.
"""

from __future__ import annotations

import dataclasses
from typing import Any, TypeVar, get_type_hints

from typing_extensions import Self, override

from fixedwire.codecs.codec import Codec
from fixedwire.serialization import Deserializer, InvalidSchemaError, Serializer, UnsupportedTypeError
from fixedwire.utils.typing import get_args, get_origin, pretty_type, substitute_type_vars

S = TypeVar('S')


class StructCodec(Codec[S]):
    __slots__ = ('_fields', '_class', '_positional')

    _fields: dict[str, Codec]
    _class: type[S]
    _positional: bool

    def __init__(self, fields_: dict[str, Codec], class_: type[S], *, positional: bool) -> None:
        self._fields = fields_
        self._class = class_
        self._positional = positional
        self.size = sum(field_codec.size for field_codec in fields_.values())

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def field_codec(self, name: str) -> Codec:
        return self._fields[name]

    @override
    @classmethod
    def _from_type(cls, type_: type[S], /, *, type_map: Codec.TypeMap) -> Self:
        class_ = get_origin(type_) or type_
        if dataclasses.is_dataclass(class_):
            positional = False
            field_names = _dataclass_field_names(class_)
        elif isinstance(class_, type) and issubclass(class_, tuple) and hasattr(class_, '_fields'):
            positional = True
            field_names = list(class_._fields)
        else:
            raise TypeError('expected a dataclass or a NamedTuple')

        try:
            hints = get_type_hints(class_)
        except NameError as e:
            raise UnsupportedTypeError(f'could not resolve the annotations of {class_.__name__}: {e}') from e

        type_vars = _bind_type_vars(class_, get_args(type_))

        # XXX: the order is important, `dict` keeps the declared order
        values: dict[str, Codec] = {}
        for field_name in field_names:
            field_type = substitute_type_vars(hints[field_name], type_vars)
            values[field_name] = Codec.from_type(field_type, type_map=type_map)
        return cls(values, class_, positional=positional)

    @override
    def _check_value(self, value: S, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__} instance, got {type(value).__name__}')
        if deep:
            for field_name, field_codec in self._fields.items():
                field_codec._check_value(getattr(value, field_name), deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: S, /) -> None:
        for field_name, field_codec in self._fields.items():
            field_codec.serialize(serializer, getattr(value, field_name))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> S:
        if self._positional:
            return self._class(*(field_codec.deserialize(deserializer) for field_codec in self._fields.values()))
        kwargs: dict[str, Any] = {}
        for field_name, field_codec in self._fields.items():
            kwargs[field_name] = field_codec.deserialize(deserializer)
        return self._class(**kwargs)


def _dataclass_field_names(class_: type) -> list[str]:
    field_names = []
    for field in dataclasses.fields(class_):
        if not field.init:
            raise InvalidSchemaError(f'{class_.__name__}.{field.name} is not an __init__ argument, it cannot be decoded')
        field_names.append(field.name)
    return field_names


def _bind_type_vars(class_: type, args: tuple[Any, ...]) -> dict[Any, Any]:
    params = getattr(class_, '__parameters__', ())
    if not args:
        # unparametrized use, unbound type parameters are rejected when a field uses one
        return {}
    if len(args) != len(params):
        raise TypeError(f'{class_.__name__} expects {len(params)} type arguments, got {len(args)}')
    for arg in args:
        if isinstance(arg, TypeVar):
            raise UnsupportedTypeError(f'{pretty_type(arg)} is not bound to a concrete type in {class_.__name__}')
    return dict(zip(params, args))
