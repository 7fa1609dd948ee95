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

from gvwire.serializer import Serializer
from gvwire.types import Buffer


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    Everything is written to a single `bytearray` because arrays back-patch their length field after their elements
    have been written.
    """

    def __init__(self, *, position: int = 0) -> None:
        self._data = bytearray()
        self._base = position

    @override
    def finalize(self) -> memoryview:
        result = memoryview(bytes(self._data))
        del self._data
        return result

    @override
    def cur_pos(self) -> int:
        return self._base + len(self._data)

    @override
    def write_byte(self, data: int) -> None:
        # bytearray.append checks for correct range
        self._data.append(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._data += data

    @override
    def patch_bytes(self, pos: int, data: Buffer) -> None:
        start = pos - self._base
        end = start + len(data)
        if start < 0 or end > len(self._data):
            raise ValueError(f'cannot patch [{pos}, {pos + len(data)}): outside of written data')
        self._data[start:end] = data
