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

from collections.abc import Mapping
from types import NoneType, UnionType
from typing import Any, TypeVar, Union, get_args as _typing_get_args, get_origin as _typing_get_origin
from weakref import WeakValueDictionary


def get_origin(t: Any, /) -> Any:
    """Extension of typing.get_origin to also work with classes that use ParametrizedTypeMixin"""
    if isinstance(t, type) and issubclass(t, ParametrizedTypeMixin):
        return t.__dict__.get('__origin__')
    return _typing_get_origin(t)


def get_args(t: Any, /) -> tuple[Any, ...]:
    """Extension of typing.get_args to also work with classes that use ParametrizedTypeMixin"""
    if isinstance(t, type) and issubclass(t, ParametrizedTypeMixin):
        return t.__dict__.get('__args__', ())
    return _typing_get_args(t)


class ParametrizedTypeMixin:
    """
    Mixin for annotation-only classes that take their parameters by subscription, like `Array[U8, 4]`.

    Subscribing creates a subclass that keeps the arguments in `__args__` and the unparametrized class in
    `__origin__`, the subclasses are cached so the same arguments always give the same class. Arguments do not need
    to be types, which is what allows an int length as a parameter.

    >>> class Pair(ParametrizedTypeMixin):
    ...     pass
    ...
    >>> Pair[int, str] is Pair[int, str]
    True
    >>> get_origin(Pair[int, str]) is Pair
    True
    >>> get_args(Pair[int, str])
    (<class 'int'>, <class 'str'>)
    >>> Pair[int, str].__name__
    'Pair[int, str]'
    >>> get_origin(Pair) is None
    True

    Subclasses can validate or normalize the arguments by overriding `__extract_args__`.

    >>> try:
    ...     Pair[int, str][bytes]
    ... except TypeError as e:
    ...     print(e)
    Pair[int, str] is already parametrized
    """

    # cache shared by all subclasses, doesn't keep subclasses alive if they have no live references anymore, this keeps
    # the cache from growing indefinitely when the arguments are dynamically generated
    __type_cache: WeakValueDictionary[tuple[type, tuple[Any, ...]], type] = WeakValueDictionary()

    @classmethod
    def __extract_args__(cls, args: tuple[Any, ...], /) -> tuple[Any, ...]:
        """Defines how to convert the received argument tuple into the stored one."""
        return args

    def __class_getitem__(cls, params: Any) -> type:
        if '__args__' in cls.__dict__:
            raise TypeError(f'{cls.__name__} is already parametrized')

        # normalize to a tuple
        args = params if isinstance(params, tuple) else (params,)
        args = cls.__extract_args__(args)

        key = (cls, args)
        sub = cls.__type_cache.get(key)
        if sub is None:
            name = f'{cls.__name__}[{", ".join(pretty_type(arg) for arg in args)}]'
            sub = type(name, (cls,), {
                '__origin__': cls,
                '__args__': args,
                '__module__': cls.__module__,
            })
            cls.__type_cache[key] = sub
        return sub


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes.

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(str, int)
    False

    But `is_subclass` also works when a NewType is given as arg 1:

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> M = NewType('M', N)
    >>> is_subclass(M, int | str)
    True
    >>> is_subclass(M, str)
    False

    Anything that doesn't resolve to a class simply isn't a subclass:

    >>> is_subclass(tuple[int, str], tuple)
    False
    """
    while (super_type := getattr(cls, '__supertype__', None)) is not None:
        cls = super_type
    if not isinstance(cls, type):
        return False
    return issubclass(cls, class_or_tuple)


def is_union(type_: Any) -> bool:
    """ True for `A | B` and for `typing.Union[A, B]`/`typing.Optional[A]`.

    >>> is_union(int | str)
    True
    >>> from typing import Optional
    >>> is_union(Optional[int])
    True
    >>> is_union(tuple[int, str])
    False
    """
    return get_origin(type_) in (Union, UnionType)


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> from typing import NewType
    >>> pretty_type(NewType('U8', int))
    'U8'
    >>> pretty_type(tuple[int, str])
    'tuple[int, str]'
    >>> pretty_type(4)
    '4'
    >>> pretty_type(None)
    'None'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__') and not isinstance(type_, type):
        return str(type_)
    elif hasattr(type_, '__name__'):
        return type_.__name__
    else:
        return repr(type_)


def substitute_type_vars(type_: Any, type_vars: Mapping[Any, Any], /) -> Any:
    """ Structurally replace every TypeVar in `type_`, including inside its arguments, using `type_vars`.

    TypeVars that aren't in `type_vars` are kept as they are.

    >>> T = TypeVar('T')
    >>> substitute_type_vars(T, {T: int})
    <class 'int'>
    >>> substitute_type_vars(tuple[T, str], {T: int})
    tuple[int, str]
    >>> substitute_type_vars(tuple[tuple[T, T], str], {T: bytes})
    tuple[tuple[bytes, bytes], str]
    >>> substitute_type_vars(tuple[T, str], {})
    tuple[~T, str]
    """
    if isinstance(type_, TypeVar):
        return type_vars.get(type_, type_)
    origin = get_origin(type_)
    if origin is None or origin in (Union, UnionType):
        # XXX: unions are never accepted as a schema, keeping them as they are is enough to reject them later on
        return type_
    args = get_args(type_)
    if not args:
        return type_
    new_args = tuple(substitute_type_vars(arg, type_vars) for arg in args)
    if new_args == args:
        return type_
    return origin[new_args]
