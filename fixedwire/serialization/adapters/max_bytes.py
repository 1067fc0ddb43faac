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

from typing import TypeVar

from typing_extensions import override

from fixedwire.serialization.deserializer import Deserializer
from fixedwire.serialization.exceptions import SerializationError
from fixedwire.serialization.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxBytesExceededError(SerializationError):
    """ This error is raised when the adapted serializer reached its maximum bytes write/read.

    After this exception is raised the adapted serializer cannot be used anymore. Handlers of this exception are
    expected to either: bubble up the exception (or an equivalent exception), or return an error. Handlers should not
    try to write again on the same serializer.

    Nothing is written to (or consumed from) the inner serializer by the call that raises this error, but the bytes
    written before it are a truncated value, so it should be considered a failed (de)serialization overall, and not
    simply a failed "read/write" operation.
    """
    pass


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        self._bytes_left = max_bytes

    def _check_exceeds(self, write_size: int) -> None:
        if write_size > self._bytes_left:
            raise MaxBytesExceededError(f'write of {write_size} bytes exceeds the maximum size')

    @override
    def write_byte(self, data: int) -> None:
        self._check_exceeds(1)
        super().write_byte(data)
        self._bytes_left -= 1

    @override
    def write_bytes(self, data: Buffer) -> None:
        data_view = memoryview(data)
        self._check_exceeds(len(data_view))
        super().write_bytes(data_view)
        self._bytes_left -= len(data_view)

    @override
    def write_bytes_at(self, data: Buffer, offset: int) -> None:
        data_view = memoryview(data)
        # only the part that grows the buffer counts towards the limit
        growth = max(0, offset + len(data_view) - self.cur_pos())
        self._check_exceeds(growth)
        super().write_bytes_at(data_view, offset)
        self._bytes_left -= growth


class MaxBytesDeserializer(GenericDeserializerAdapter[D]):
    """ Limits how many bytes can be consumed from the inner deserializer.

    The budget is only spent by reads that succeed, so a read that fails with BufferOverflowError can be retried.
    """

    def __init__(self, deserializer: D, max_bytes: int) -> None:
        super().__init__(deserializer)
        self._bytes_left = max_bytes

    def _check_exceeds(self, read_size: int) -> None:
        if read_size > self._bytes_left:
            raise MaxBytesExceededError(f'read of {read_size} bytes exceeds the maximum size')

    @override
    def read_byte(self) -> int:
        self._check_exceeds(1)
        result = super().read_byte()
        self._bytes_left -= 1
        return result

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        self._check_exceeds(n)
        result = super().read_bytes(n, exact=exact)
        self._bytes_left -= len(result)
        return result

    @override
    def read_all(self) -> Buffer:
        result = super().read_bytes(self._bytes_left, exact=False)
        self._bytes_left -= len(result)
        if not self.is_empty():
            raise MaxBytesExceededError('there are more bytes than the maximum size')
        return result

    @override
    def fork_at(self, offset: int) -> Deserializer:
        # the fork gets what is left of the budget, reads from it don't spend this one
        return MaxBytesDeserializer(super().fork_at(offset), self._bytes_left)
