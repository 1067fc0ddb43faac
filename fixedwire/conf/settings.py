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

from typing import Optional

from pydantic import field_validator

from fixedwire.utils.pydantic import BaseModel


class CodecSettings(BaseModel):
    # Longest fixed array accepted when building a codec for `Array[T, N]`
    MAX_ARRAY_LENGTH: int = 32

    # When set, `Codec.to_bytes` fails with MaxBytesExceededError instead of producing a longer result
    MAX_WRITE_BYTES: Optional[int] = None

    # When set, `Codec.from_bytes` fails with MaxBytesExceededError instead of consuming more bytes than this
    MAX_READ_BYTES: Optional[int] = None

    # Check on every serialization that the number of bytes written is the static size of the codec
    CHECK_ENCODED_SIZE: bool = True

    @field_validator('MAX_ARRAY_LENGTH')
    @classmethod
    def _validate_max_array_length(cls, max_array_length: int) -> int:
        if max_array_length < 1:
            raise ValueError(f'MAX_ARRAY_LENGTH must be at least 1, got {max_array_length}')
        return max_array_length

    @field_validator('MAX_WRITE_BYTES', 'MAX_READ_BYTES')
    @classmethod
    def _validate_max_bytes(cls, max_bytes: Optional[int]) -> Optional[int]:
        if max_bytes is not None and max_bytes < 0:
            raise ValueError(f'byte limits cannot be negative, got {max_bytes}')
        return max_bytes

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        from fixedwire.conf.utils import load_yaml_settings
        return load_yaml_settings(cls, filepath=filepath)
