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

from .serializer import Serializer
from .types import Buffer


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    This implementation owns a single growable bytearray, so random access writes can patch previously written
    bytes. Ownership of the bytearray is handed over to the caller by `finalize`.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    @override
    def finalize(self) -> memoryview:
        result = memoryview(self._buffer)
        del self._buffer
        return result

    def data(self) -> bytes:
        """Copy of everything written so far, the serializer remains usable."""
        return bytes(self._buffer)

    def clear(self) -> None:
        """Drop everything written so far so the serializer can be reused."""
        self._buffer.clear()

    @override
    def cur_pos(self) -> int:
        return len(self._buffer)

    @override
    def write_byte(self, data: int) -> None:
        # bytearray.append checks for correct range
        self._buffer.append(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._buffer += memoryview(data)

    @override
    def write_bytes_at(self, data: Buffer, offset: int) -> None:
        if offset < 0:
            raise ValueError('offset cannot be negative')
        part = memoryview(data)
        end = offset + len(part)
        if len(self._buffer) < end:
            self._buffer.extend(bytes(end - len(self._buffer)))
        self._buffer[offset:end] = part
