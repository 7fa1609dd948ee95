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
The encoding context travels alongside every encode, slice and decode call.

It carries the byte order of the message and the bookkeeping needed while descending into nested containers. A
container never passes its own context to its children, it passes `context.copy_for_child()`:

>>> ctx = EncodingContext(byte_order=ByteOrder.LITTLE, max_depth=2)
>>> ctx.copy_for_child().depth
1
>>> ctx.copy_for_child().copy_for_child().depth
2
>>> try:
...     ctx.copy_for_child().copy_for_child().copy_for_child()
... except MaxDepthExceededError as e:
...     print(e)
containers nested deeper than 2 levels
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum, unique
from typing import TYPE_CHECKING, Optional

from gvwire.exceptions import MaxDepthExceededError

if TYPE_CHECKING:
    from gvwire.conf.settings import GVWireSettings


@unique
class ByteOrder(str, Enum):
    LITTLE = 'little'
    BIG = 'big'
    NATIVE = 'native'

    @property
    def struct_prefix(self) -> str:
        """The `struct` format prefix for this byte order, always with standard sizes and no alignment."""
        return _STRUCT_PREFIXES[self]


_STRUCT_PREFIXES = {
    ByteOrder.LITTLE: '<',
    ByteOrder.BIG: '>',
    ByteOrder.NATIVE: '=',
}

# Same values as the defaults of GVWireSettings, used when a context is built by hand.
DEFAULT_MAX_DEPTH = 64
DEFAULT_MAX_ARRAY_LENGTH = 64 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class EncodingContext:
    byte_order: ByteOrder = ByteOrder.NATIVE
    depth: int = 0
    max_depth: int = DEFAULT_MAX_DEPTH
    max_array_length: int = DEFAULT_MAX_ARRAY_LENGTH
    allow_empty_arrays: bool = False

    @classmethod
    def default(cls, *, byte_order: Optional[ByteOrder] = None) -> EncodingContext:
        """Build a top-level context from the global settings."""
        from gvwire.conf.get_settings import get_global_settings
        return cls.from_settings(get_global_settings(), byte_order=byte_order)

    @classmethod
    def from_settings(cls, settings: GVWireSettings, *, byte_order: Optional[ByteOrder] = None) -> EncodingContext:
        return cls(
            byte_order=settings.DEFAULT_BYTE_ORDER if byte_order is None else byte_order,
            max_depth=settings.MAX_DEPTH,
            max_array_length=settings.MAX_ARRAY_LENGTH,
            allow_empty_arrays=settings.ALLOW_EMPTY_ARRAYS,
        )

    def copy_for_child(self) -> EncodingContext:
        """Context to use for a value nested one level deeper than the current one."""
        depth = self.depth + 1
        if depth > self.max_depth:
            raise MaxDepthExceededError(f'containers nested deeper than {self.max_depth} levels')
        return dataclasses.replace(self, depth=depth)

    def struct_format(self, fmt: str) -> str:
        """Prefix a `struct` format (without a byte order character) with this context's byte order."""
        return self.byte_order.struct_prefix + fmt
