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

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from gvwire.types import Buffer

if TYPE_CHECKING:
    from gvwire.bytes_serializer import BytesSerializer


class Serializer(ABC):
    """The growing output buffer every `encode_into` writes to.

    Positions are absolute, `cur_pos()` is the offset in the message of the next byte that will be written, which is
    what padding is computed against.
    """

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from gvwire.bytes_serializer import BytesSerializer
        return BytesSerializer()

    @abstractmethod
    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the serializer cannot be used after this."""
        raise NotImplementedError

    @abstractmethod
    def cur_pos(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single byte."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        """Write a byte sequence."""
        raise NotImplementedError

    @abstractmethod
    def patch_bytes(self, pos: int, data: Buffer) -> None:
        """Overwrite bytes that were already written, starting at the absolute position `pos`."""
        raise NotImplementedError

    def write_padding(self, n: int) -> None:
        """Write `n` zero bytes."""
        if n:
            self.write_bytes(bytes(n))

    def write_struct(self, format: str, *values: Any) -> None:
        self.write_bytes(struct.pack(format, *values))
