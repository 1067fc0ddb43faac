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

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import BufferOverflowError, TrailingDataError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation keeps a read-only view of the whole buffer and an offset that is advanced as bytes are read.
    The offset only moves after a read is known to succeed, a failed read leaves it where it was.
    """

    def __init__(self, data: Buffer, offset: int = 0) -> None:
        self._view = memoryview(data).toreadonly()
        if not 0 <= offset <= len(self._view):
            raise BufferOverflowError(f'offset {offset} is out of bounds')
        self._offset = offset

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise TrailingDataError(f'{self.remaining()} trailing bytes')
        del self._view

    @override
    def cur_pos(self) -> int:
        return self._offset

    @override
    def remaining(self) -> int:
        return len(self._view) - self._offset

    @override
    def is_empty(self) -> bool:
        return self._offset >= len(self._view)

    @override
    def peek_byte(self) -> int:
        if self.is_empty():
            raise BufferOverflowError('not enough bytes to read')
        return self._view[self._offset]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        if exact and self.remaining() < n:
            raise BufferOverflowError(f'not enough bytes to read: {n} requested, {self.remaining()} available')
        return self._view[self._offset:self._offset + n]

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._offset += 1
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        b = self.peek_bytes(n, exact=exact)
        self._offset += len(b)
        return b

    @override
    def read_all(self) -> memoryview:
        b = self._view[self._offset:]
        self._offset = len(self._view)
        return b

    @override
    def fork_at(self, offset: int) -> 'BytesDeserializer':
        return BytesDeserializer(self._view, offset)
