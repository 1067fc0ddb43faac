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

from typing import Any


class SerializationError(Exception):
    """Base class for every error raised while reading or writing a buffer."""


class BufferOverflowError(SerializationError):
    """ A read needed more bytes than what is left between the cursor and the end of the buffer.

    The cursor is not moved when this error is raised, so the same bytes are still available to a following read.
    """


class InvalidVariantError(SerializationError):
    """ A decoded tag value does not match any discriminant declared by the enum.

    The tag bytes have already been consumed when this is raised.
    """

    def __init__(self, enum_class: type, value: Any) -> None:
        super().__init__(f'{value!r} is not a valid discriminant for {enum_class.__name__}')
        self.enum_class = enum_class
        self.value = value


class TrailingDataError(SerializationError):
    """The value was fully decoded but there are unread bytes left in the buffer."""


class UnsupportedTypeError(TypeError):
    """There is no codec that knows how to handle the given type annotation."""


class InvalidSchemaError(TypeError):
    """ The type is supported in general but its declaration can't be given a fixed layout.

    For example an enum without a declared tag type or with a variant that carries a payload.
    """
